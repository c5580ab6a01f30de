from fallible.config import SettingsError
from fallible.exceptions import FallibleException
from fallible.result import UnwrapError


class TestFallibleException:
    def test_is_exception(self) -> None:
        assert issubclass(FallibleException, Exception)

    def test_can_be_raised_and_caught(self) -> None:
        try:
            raise FallibleException("test")
        except FallibleException as e:
            assert str(e) == "test"


class TestExceptionInheritance:
    def test_unwrap_error_inherits_fallible_exception(self) -> None:
        assert issubclass(UnwrapError, FallibleException)

    def test_settings_error_inherits_fallible_exception(self) -> None:
        assert issubclass(SettingsError, FallibleException)

    def test_settings_error_still_caught_as_exception(self) -> None:
        try:
            raise SettingsError("stack_limit bad")
        except Exception as e:
            assert "stack_limit bad" in str(e)
