import pytest

from module_injection.capabilities import (
    Capabilities,
    capture_state,
    detect_capabilities,
    restore_state,
    visual_state_services,
)
from module_injection.events import ANY_REGION, NavigationBus, NavigationEventArgs
from module_injection.info import RegionInfo, RegionItemInfo, RegionItemVisualInfo, RegionVisualInfo
from module_injection.module import Module


class FullViewModel:
    def __init__(self) -> None:
        self.state = {"page": 1}

    def set_parameter(self, parameter) -> None:
        self.parameter = parameter

    def get_state(self):
        return self.state

    def restore_state(self, state) -> None:
        self.state = state


class Flusher:
    def enforce_save_state(self) -> None:
        pass


def test_detect_capabilities_per_instance() -> None:
    assert detect_capabilities(FullViewModel()) == Capabilities(True, True, True)
    assert detect_capabilities(object()) == Capabilities()
    assert detect_capabilities(None) == Capabilities()


def test_capture_and_restore_skip_missing_capabilities() -> None:
    view_model = FullViewModel()
    assert capture_state(view_model) == {"page": 1}
    assert restore_state(view_model, {"page": 2}) is True
    assert view_model.state == {"page": 2}
    assert restore_state(view_model, None) is False
    assert capture_state(object()) is None
    assert restore_state(object(), {"page": 3}) is False


def test_visual_state_services_collects_self_and_helpers() -> None:
    helper = Flusher()

    class Both(Flusher):
        visual_state_services = [helper, helper, "not-a-service"]

    both = Both()
    assert visual_state_services(both) == [both, helper]
    assert visual_state_services(object()) == []


def test_bus_filters_by_region_and_wildcard() -> None:
    bus = NavigationBus()
    seen, everything = [], []
    sub_id = bus.subscribe("main", seen.append)
    bus.subscribe(ANY_REGION, everything.append)

    event = NavigationEventArgs(region_name="main", new_key="A")
    assert bus.publish(event) == 2
    assert bus.publish(NavigationEventArgs(region_name="side")) == 1
    assert seen == [event]
    assert len(everything) == 2

    bus.unsubscribe(sub_id)
    bus.unsubscribe("unknown")
    bus.publish(event)
    assert seen == [event]


def test_bus_keeps_dispatching_after_handler_error() -> None:
    bus = NavigationBus()
    seen = []

    def broken(_event) -> None:
        raise RuntimeError("boom")

    bus.subscribe("main", broken)
    bus.subscribe("main", seen.append)
    bus.publish(NavigationEventArgs(region_name="main"))
    assert len(seen) == 1


def test_event_to_dict_omits_view_models() -> None:
    event = NavigationEventArgs("main", object(), object(), "A", "B")
    assert event.to_dict() == {"region_name": "main", "old_key": "A", "new_key": "B"}


def test_info_from_dict_skips_malformed_entries() -> None:
    logical = RegionInfo.from_dict(
        {"selectedKey": "A", "items": [{"key": "A", "viewModelState": " keep "}, {"viewName": "V"}, "junk"]},
        region_name="main",
    )
    assert logical.region_name == "main"
    assert logical.selected_key == "A"
    assert logical.items == [RegionItemInfo(key="A", view_model_state=" keep ")]
    assert RegionInfo.from_dict(None) is None

    visual = RegionVisualInfo.from_dict({"regionName": "main", "items": [{"viewName": "V", "viewPart": "p"}, 3]})
    assert visual.items == [RegionItemVisualInfo(view_name="V", view_part="p")]
    assert visual.find(None, "V", "p") is visual.items[0]
    assert visual.find("A", "V", "p") is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"key": ""},
        {"key": "a"},
        {"key": None, "view_model_name": "X"},
    ],
)
def test_module_validates_descriptor(kwargs) -> None:
    with pytest.raises(ValueError):
        Module(**kwargs)
