import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]

TEST_LAYERS = ["domain", "application", "bdd", "integration"]


def _install(session: nox.Session) -> None:
    """Install the project with its test extra into the nox virtualenv."""
    session.run(
        "poetry",
        "install",
        "--all-extras",
        external=True,
    )


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no remote calls, no HTTP)."""
    _install(session)
    session.run("pytest", "tests/ordering/domain/")


@nox.session(python=PYTHON_VERSIONS[-1])
@nox.parametrize("layer", TEST_LAYERS)
def tests_layer(session: nox.Session, layer: str) -> None:
    """Run a single test layer on the newest Python."""
    _install(session)
    session.run("pytest", f"tests/ordering/{layer}/")
