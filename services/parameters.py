# ============================================================================
# PIPELINE PARAMETER PARSER
# ============================================================================
# STATUS: Service - CLI parameter string parsing
# PURPOSE: Turn "key=value;key2=true" into a typed parameter mapping
# CREATED: 15 OCT 2026
# ============================================================================
"""
Pipeline Parameter Parser

    parse_pipeline_parameters("Region=westus;RunSlowTests=true;")
    -> {"Region": "westus", "RunSlowTests": True}

Rules:
- Segments are separated by ';'; empty segments (e.g. a trailing ';') are skipped
- Each segment must contain exactly one '='
- "true" / "false" (exact, case-sensitive) become booleans; anything else stays a string
"""

from typing import Dict, Optional, Union

from core.errors import ParameterParseError

SEGMENT_SEPARATOR = ";"
KEY_VALUE_SEPARATOR = "="

_BOOLEAN_LITERALS = {"true": True, "false": False}


def parse_pipeline_parameters(raw: Optional[str]) -> Dict[str, Union[bool, str]]:
    """
    Parse a semicolon-delimited key=value string.

    Args:
        raw: Parameter string; None or empty yields an empty mapping

    Returns:
        Mapping of key -> bool or str

    Raises:
        ParameterParseError: Segment without exactly one '=' or with an empty key
    """
    parameters: Dict[str, Union[bool, str]] = {}
    if not raw:
        return parameters

    for segment in raw.split(SEGMENT_SEPARATOR):
        if not segment.strip():
            continue

        if segment.count(KEY_VALUE_SEPARATOR) != 1:
            raise ParameterParseError(segment)

        key, value = (part.strip() for part in segment.split(KEY_VALUE_SEPARATOR))
        if not key:
            raise ParameterParseError(segment)

        parameters[key] = _BOOLEAN_LITERALS.get(value, value)

    return parameters


__all__ = ["parse_pipeline_parameters"]
