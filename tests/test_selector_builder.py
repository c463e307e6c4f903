import pytest

from kafkacli.cli.common.selector_builder import build_selector
from kafkacli.core.selectors import NameRegexSelector


def test_build_selector_from_pattern():
    selector = build_selector("orders-.*")

    assert isinstance(selector, NameRegexSelector)


@pytest.mark.parametrize("value", ["", None])
def test_build_selector_requires_connector(value):
    with pytest.raises(ValueError, match="connector"):
        build_selector(value)


def test_build_selector_invalid_regex():
    with pytest.raises(ValueError):
        build_selector("(unclosed")
