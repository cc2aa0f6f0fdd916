"""Helpers shared by device search and the brand tree."""

from typing import Optional
from schemas.device import DeviceRow, DEFAULT_MODEL_KEY


def build_codename(code: Optional[str], code_alias: Optional[str]) -> str:
    """
    Combine the primary code with its alias.

    "ABC" + "XYZ" -> "ABC / XYZ", "" + "XYZ" -> "XYZ", an alias equal to the
    code is dropped.
    """
    code = code or ""
    if code_alias and code_alias != code:
        return f"{code} / {code_alias}" if code else code_alias
    return code


def add_model_entry(models: dict[str, str], row: DeviceRow) -> None:
    """
    Record the model identifier of one row in a version -> model map.

    Rows with a ver_name map it to model (or code); rows without one fall back
    to DEFAULT_MODEL_KEY. A row with neither ver_name nor model adds nothing.
    """
    if row.ver_name:
        models[row.ver_name] = row.model or row.code or ""
    elif row.model:
        models[DEFAULT_MODEL_KEY] = row.model
