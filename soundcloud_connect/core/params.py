"""
Request parameter assembly for SoundCloud API calls.
"""

from collections.abc import Iterable, Mapping


def build_request_params(
    defaults: Mapping[str, str],
    overrides: Mapping[str, str] | None = None,
    exclude: Iterable[str] = (),
) -> dict[str, str]:
    """
    Merge operation-specific parameters over the defaults.

    Insertion order is preserved: default keys come first, in their
    original order, followed by new keys from ``overrides``. A key present
    in both keeps its default position and takes the override value.
    Keys named in ``exclude`` are removed after merging.

    Args:
        defaults: Base parameters (client credentials, redirect URI)
        overrides: Operation-specific parameters
        exclude: Keys to drop from the merged result

    Returns:
        A fresh dict; neither input is modified.
    """
    params = dict(defaults)
    params.update(overrides or {})
    for key in exclude:
        params.pop(key, None)
    return params


def to_nested_form_fields(prefix: str, mapping: Mapping[str, str]) -> dict[str, str]:
    """
    Rewrite flat keys into the bracketed form-field convention.

    ``to_nested_form_fields("track", {"title": "x"})`` returns
    ``{"track[title]": "x"}``.
    """
    return {f"{prefix}[{key}]": value for key, value in mapping.items()}
