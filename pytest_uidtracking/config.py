from typing import TYPE_CHECKING, Any, Optional, Type, TypeVar

from pydantic import BaseModel, Field, field_validator

from pytest_uidtracking.types import ConfigurationParameters

if TYPE_CHECKING:
    from _pytest.config import Config  # pragma: no cover

ENABLED_PROPERTY_NAME = "uid_tracking_enabled"
OUTPUT_DIR_PROPERTY_NAME = "uid_tracking_output_dir"
OUTPUT_FILE_PROPERTY_NAME = "uid_tracking_output_file"

DEFAULT_FILE_NAME = "pytest-unique-test-ids.txt"


class Dto(BaseModel):
    pass


T = TypeVar("T", bound=Dto)


def map_from_parameters(parameters: ConfigurationParameters, cls: Type[T]) -> T:
    """Build ``cls`` from the parameters named by its field aliases.

    Absent parameters are left out so the model defaults apply.
    """
    data = {}
    for name, field in cls.model_fields.items():
        key = field.alias or name
        value = parameters.get(key)
        if value is not None:
            data[key] = value
    return cls(**data)


class TrackingSettings(Dto):
    enabled: bool = Field(False, alias=ENABLED_PROPERTY_NAME)
    output_dir: Optional[str] = Field(None, alias=OUTPUT_DIR_PROPERTY_NAME)
    output_file: str = Field(DEFAULT_FILE_NAME, alias=OUTPUT_FILE_PROPERTY_NAME)

    @field_validator("enabled", mode="before")
    @classmethod
    def _true_only_when_true(cls, value: Any) -> Any:
        # Anything but "true" (any case) is false
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value

    @field_validator("output_dir", mode="before")
    @classmethod
    def _none_when_blank(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("output_file", mode="before")
    @classmethod
    def _default_when_blank(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_FILE_NAME
        return value


def get_settings(parameters: ConfigurationParameters) -> TrackingSettings:
    return map_from_parameters(parameters, TrackingSettings)


class PytestConfigurationParameters:
    """Command line options first, then ini values. Blank means absent."""

    def __init__(self, config: "Config") -> None:
        self.config = config

    def get(self, key: str) -> Optional[str]:
        value = self.config.getoption(key, default=None)
        if value is None:
            value = self.config.getini(key)
        if isinstance(value, bool):
            value = str(value).lower()
        if not value or not str(value).strip():
            return None
        return str(value)
