import os

import pytest

# Test layer markers, keyed by the directory a test module lives in
LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "bdd": pytest.mark.bdd,
    "integration": pytest.mark.integration,
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="PROTEAN_ENV overlay the ordering domain is configured with",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the ordering domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    for item in items:
        layer = item.path.parent.name
        marker = LAYER_MARKERS.get(layer)
        if marker is None:
            continue
        item.add_marker(marker)

        # HTTP round trips are the slow end of the suite
        if layer == "integration" and item.get_closest_marker("fast") is None:
            item.add_marker(pytest.mark.slow)
