from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from rawtweet.core.exceptions import TemplateParseError
from rawtweet.core.logger import get_logger
from rawtweet.oauth.params import ensure_scalar, is_utf8_text
from rawtweet.oauth.types import Method

logger = get_logger(__name__)

# StrictBool first so JSON true/false never turn into 1/0.
TemplateValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]


class RequestTemplate(BaseModel):
    """Declarative description of one API request.

    Example (JSON):
        {"endpoint": "statuses/user_timeline.json",
         "method": "GET",
         "parameters": {"screen_name": "twitterapi", "count": 2}}
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    endpoint: str = Field(min_length=1)
    method: Method
    parameters: Dict[str, TemplateValue] = Field(default_factory=dict)

    @field_validator("parameters", mode="before")
    @classmethod
    def _check_scalar_values(cls, value: Any) -> Any:
        # Template errors are not ValueErrors, so pydantic lets them propagate.
        if isinstance(value, dict):
            for key, item in value.items():
                ensure_scalar(key, item)
        return value

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint_text(cls, value: str) -> str:
        if not is_utf8_text(value):
            raise ValueError("endpoint is not valid UTF-8 text")
        return value

    def endpoint_url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self.endpoint.lstrip('/')}"


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def load_template(template_path: Union[str, Path]) -> RequestTemplate:
    """
    Load a request template from a JSON (or YAML) file.

    Raises:
        TemplateParseError: If the file is missing or unreadable, is not valid
                            JSON/YAML, or does not describe a template.
        UnsupportedValueType: If a parameter value is not a string, number or boolean.
    """
    path = Path(template_path)
    if not path.is_file():
        raise TemplateParseError(f"Template file not found: {template_path}")

    try:
        document = _read_document(path)
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateParseError(f"Failed to read template file {template_path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TemplateParseError(f"Failed to parse template file {template_path}: {e}") from e

    if not isinstance(document, dict):
        raise TemplateParseError(
            f"Template file {template_path} must contain an object, got {type(document).__name__}"
        )

    try:
        template = RequestTemplate.model_validate(document)
    except ValidationError as e:
        raise TemplateParseError(f"Invalid template file {template_path}: {e}") from e

    logger.info(f"Loaded template from {template_path}")
    return template
