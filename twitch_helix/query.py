"""
Query string building for Helix endpoints.

Helix takes repeated keys for list parameters (``?id=1&id=2``) and mixes user
ids with login names, so ids are classified before they are encoded.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote

from .errors import ValidationError


NUMERIC_ID_REGEX = re.compile(r"[0-9]+")

QueryPairs = List[Tuple[str, str]]
Identifier = Union[str, int]


def is_numeric_id(value: Identifier) -> bool:
    """Check if value is a numeric user id rather than a login name."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return bool(NUMERIC_ID_REGEX.fullmatch(value))


def id_type(value: Identifier, id_key: str = "id", login_key: str = "login") -> str:
    """Return the parameter name an identifier is sent under."""
    return id_key if is_numeric_id(value) else login_key


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_options(options: Optional[Mapping[str, Any]]) -> QueryPairs:
    """
    Flatten an options mapping into ordered query pairs.

    None values are dropped and list/tuple values become repeated keys.
    """
    pairs: QueryPairs = []
    if not options:
        return pairs

    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_value(item)) for item in value)
        else:
            pairs.append((key, _format_value(value)))
    return pairs


def identity_pairs(
    ids: Union[Identifier, Sequence[Identifier]],
    id_key: str = "id",
    login_key: str = "login",
) -> QueryPairs:
    """Map one id/login or a list of them to query pairs, keeping input order."""
    if isinstance(ids, (str, int)) and not isinstance(ids, bool):
        ids = [ids]
    elif not isinstance(ids, (list, tuple)):
        raise ValidationError(
            "Expected a user id, a login name or a list of them",
            {"received": type(ids).__name__},
        )

    pairs: QueryPairs = []
    for value in ids:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValidationError(
                "User ids and login names must be strings or integers",
                {"received": type(value).__name__},
            )
        pairs.append((id_type(value, id_key, login_key), str(value)))
    return pairs


def build_query(pairs: Iterable[Tuple[str, str]]) -> str:
    """Join pairs into ``?k=v&k=v``; empty input gives an empty string."""
    parts = [f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in pairs]
    if not parts:
        return ""
    return "?" + "&".join(parts)
