"""Phone / pad classification."""

from typing import Optional
from schemas.device import DeviceType

PAD_DTYPE = "pad"
PHONE_DTYPE = "mob"

# Name fragments that mark a tablet when dtype is not recognized
PAD_NAME_TOKENS = ("平板", "Pad", "Tablet")


def classify_device_type(device_name: Optional[str], dtype: Optional[str]) -> DeviceType:
    """
    Classify a device as pad or phone.

    An explicit dtype wins; otherwise the device name is checked for tablet
    tokens, and anything else is a phone.
    """
    if dtype == PAD_DTYPE:
        return DeviceType.PAD
    if dtype == PHONE_DTYPE:
        return DeviceType.PHONE

    name = device_name or ""
    if any(token in name for token in PAD_NAME_TOKENS):
        return DeviceType.PAD
    return DeviceType.PHONE
