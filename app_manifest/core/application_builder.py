"""Build applications from descriptor file content"""

from typing import Any, Dict

import yaml

from ..api.exceptions import DescriptorParseError
from ..constants import DESCRIPTOR_DESCRIPTION_FIELD, DESCRIPTOR_NAME_FIELD
from ..models.application import Application


def parse_descriptor(path: str, raw_content: bytes) -> Dict[str, Any]:
    """
    Parse descriptor content into a mapping

    Args:
        path: Application path, used in error messages
        raw_content: Raw descriptor bytes

    Returns:
        Parsed descriptor mapping

    Raises:
        DescriptorParseError: If content is not a YAML mapping
    """
    try:
        text = raw_content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DescriptorParseError(path, f"not valid UTF-8: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DescriptorParseError(path, f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        kind = "empty document" if data is None else type(data).__name__
        raise DescriptorParseError(path, f"expected a mapping, got {kind}")

    return data


def build_application(path: str, raw_content: bytes) -> Application:
    """
    Build an application from its descriptor

    Args:
        path: Normalized application directory path, stored verbatim
        raw_content: Raw descriptor bytes

    Returns:
        Application

    Raises:
        DescriptorParseError: If the descriptor is malformed or has no name
    """
    data = parse_descriptor(path, raw_content)

    name = data.get(DESCRIPTOR_NAME_FIELD)
    if not isinstance(name, str) or not name.strip():
        raise DescriptorParseError(path, f"missing required field '{DESCRIPTOR_NAME_FIELD}'")

    description = data.get(DESCRIPTOR_DESCRIPTION_FIELD)
    if description is not None and not isinstance(description, str):
        description = str(description)

    return Application(
        name=name.strip(),
        path=path,
        description=description,
        spec=data
    )
