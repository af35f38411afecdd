from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from pytest_uidtracking.listener import UniqueIdTrackingListener

pytest_plugins = ["pytester"]


class MapParameters:
    def __init__(self, values: Dict[str, str]) -> None:
        self.values = values

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)


@pytest.fixture
def make_parameters() -> Callable[..., MapParameters]:
    def _make_parameters(**values: str) -> MapParameters:
        return MapParameters(values)

    return _make_parameters


@pytest.fixture
def listener(tmp_path: Path, monkeypatch) -> UniqueIdTrackingListener:
    listener = UniqueIdTrackingListener()
    monkeypatch.setattr(listener, "current_working_dir", lambda: tmp_path)
    return listener


@pytest.fixture
def testmodule(pytester) -> Path:
    return pytester.makepyfile(
        """
    import pytest
    from hypothesis import strategies as st, given


    @pytest.mark.parametrize(
        "left, right",
        (
            (2, 2),
            pytest.param(3.14, 5.55, marks=pytest.mark.skip("Skipped!")),
            (float("nan"), 42),
        ),
    )
    def test_examples(left, right):
        assert left + right == right + left


    NUMBER = st.integers() | st.floats()


    @given(left=NUMBER, right=NUMBER)
    def test_properties(left, right):
        assert left + right == right + left


    @pytest.fixture
    def error_at_setup():
        raise RuntimeError

    def test_error_at_setup(error_at_setup):
        pass

    @pytest.fixture
    def error_at_teardown():
        yield
        raise RuntimeError

    def test_error_at_teardown(error_at_teardown):
        pass


    class TestGrouped:
        def test_inside_class(self):
            pass
    """
    )


@pytest.fixture
def expected_unique_ids(request) -> List[str]:
    module_name = request.node.originalname
    return [
        f"{module_name}.py::test_examples[2-2]",
        f"{module_name}.py::test_examples[3.14-5.55]",
        f"{module_name}.py::test_examples[nan-42]",
        f"{module_name}.py::test_properties",
        f"{module_name}.py::test_error_at_setup",
        f"{module_name}.py::test_error_at_teardown",
        f"{module_name}.py::TestGrouped::test_inside_class",
    ]
