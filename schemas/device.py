"""Device catalog schemas."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# Key used in a model map when a row carries no ver_name
DEFAULT_MODEL_KEY = "型号"


class DeviceType(str, Enum):
    """Device category shown to the user."""
    PAD = "pad"
    PHONE = "phone"


class DeviceRow(BaseModel):
    """One CSV record. Absent cells are None, present cells are trimmed strings."""
    model_config = ConfigDict(protected_namespaces=(), extra="ignore")

    model: Optional[str] = None
    dtype: Optional[str] = None
    brand: Optional[str] = None
    brand_title: Optional[str] = None
    code: Optional[str] = None
    code_alias: Optional[str] = None
    model_name: Optional[str] = None
    ver_name: Optional[str] = None

    def is_valid(self) -> bool:
        """A row is kept only when model and brand are present."""
        return self.model is not None and self.brand is not None


class ParseIssue(BaseModel):
    """Non-fatal problem reported while parsing the CSV."""
    type: str = "FieldMismatch"
    code: str
    message: str
    row: Optional[int] = Field(None, description="Zero-based data row index")


class Brand(BaseModel):
    """Deduplicated brand entry."""
    id: str
    name: str
    brand: str
    brand_title: str


class Device(BaseModel):
    """Search result: one device grouped by brand, dtype and model name."""
    model_config = ConfigDict(populate_by_name=True)

    brand_name: Optional[str] = Field(None, alias="brandName")
    phone_name: str = Field(alias="phoneName")
    codename: str = ""
    models: dict[str, str] = Field(default_factory=dict)
    dtype: Optional[str] = None
    brand: Optional[str] = None


class BrandDevice(BaseModel):
    """Device entry inside a brand tree."""
    codename: str = ""
    model: dict[str, str] = Field(default_factory=dict)
    dtype: Optional[str] = None


class BrandAbout(BaseModel):
    """Brand metadata taken from the first row of the brand."""
    model_config = ConfigDict(populate_by_name=True)

    brand: str
    brand_zh: Optional[str] = None
    sub_brand: str = Field(alias="sub-brand")
    sub_brand_zh: Optional[str] = Field(None, alias="sub-brand_zh")
    type: str = "phone"


class BrandTree(BaseModel):
    """Brand metadata plus its devices, one single-key mapping per model name."""
    about: BrandAbout
    phones: list[dict[str, BrandDevice]] = Field(default_factory=list)

    def device_names(self) -> list[str]:
        """Model names in first-seen order."""
        return [name for phone in self.phones for name in phone]


class LoadResult(BaseModel):
    """Outcome of parsing one CSV text."""
    rows: list[DeviceRow] = Field(default_factory=list)
    issues: list[ParseIssue] = Field(default_factory=list)
    total_rows: int = 0
    missing_columns: list[str] = Field(default_factory=list)
    lenient: bool = False
    source: Optional[str] = None
