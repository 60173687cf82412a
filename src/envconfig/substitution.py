"""
@meta
name: token_substitution
type: utility
domain: config
responsibility:
  - Build ${KEY} replacement rules from a replacement mapping
  - Substitute tokens inside strings nested at any depth
inputs:
  - Parsed config values
  - Replacement mapping (key -> replacement text)
outputs:
  - Values of the same shape with tokens replaced
tags:
  - utility
  - config
  - substitution
lifecycle:
  status: active
"""

"""Recursive ``${TOKEN}`` substitution for config values."""

import re
from typing import Any, Dict, Mapping, Pattern


def token_for(key: str) -> str:
    """
    Return the literal template token matched for a replacement key.

    Examples:
        >>> token_for("home")
        '${HOME}'
    """
    return "${" + key.upper() + "}"


def build_replacement_rules(replace: Mapping[str, Any]) -> Dict[str, Pattern]:
    """
    Compile one pattern per replacement key.

    Each pattern matches the literal text ``${KEY}`` where KEY is the
    upper-cased replacement key. Matching is case-sensitive, so a template
    written as ``${Home}`` is never substituted.

    Args:
        replace: Mapping of replacement key to replacement value.

    Returns:
        Mapping of replacement key to compiled pattern.
    """
    return {key: re.compile(re.escape(token_for(key))) for key in replace}


def substitute(value: Any, rules: Mapping[str, Pattern], replace: Mapping[str, Any]) -> Any:
    """
    Replace every rule's token in ``value`` and in anything nested inside it.

    Mappings, lists and tuples are rebuilt with substituted members; other
    non-string values are returned unchanged. Replacement text is inserted
    literally (no backreference expansion).

    Args:
        value: Config value to process.
        rules: Compiled rules from :func:`build_replacement_rules`.
        replace: Replacement mapping the rules were built from.

    Returns:
        Value of the same shape with tokens replaced.
    """
    if isinstance(value, str):
        for key, pattern in rules.items():
            text = str(replace[key])
            value = pattern.sub(lambda _match: text, value)
        return value
    if isinstance(value, Mapping):
        return {k: substitute(v, rules, replace) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute(item, rules, replace) for item in value]
    if isinstance(value, tuple):
        return tuple(substitute(item, rules, replace) for item in value)
    return value
