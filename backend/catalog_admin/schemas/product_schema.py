# backend/catalog_admin/schemas/product_schema.py
import enum
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

from pydantic import (
    AfterValidator,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    HttpUrl,
    Tag,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

ROOT_ERROR_PATH = "_root"

_HTTP_URL = TypeAdapter(HttpUrl)


def _ensure_url(value: str) -> str:
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("image_url", "Invalid image URL")
    return value


ImageUrl = Annotated[str, AfterValidator(_ensure_url)]
Price = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]
PriceAdjustment = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]


class ProductStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"


class _SubmissionModel(BaseModel):
    # payloads arrive camelCased from the admin form; snake_case is accepted too
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )


class SpecificationDetail(_SubmissionModel):
    key: str = Field(min_length=1)
    value: str = Field(min_length=1)


class SpecificationGroup(_SubmissionModel):
    group_name: str = Field(min_length=1)
    details: List[SpecificationDetail] = Field(min_length=1)


def _specification_kind(value: Any) -> str:
    if isinstance(value, dict):
        grouped = "groupName" in value or "group_name" in value or "details" in value
    else:
        grouped = hasattr(value, "details")
    return "group" if grouped else "detail"


Specification = Annotated[
    Union[
        Annotated[SpecificationGroup, Tag("group")],
        Annotated[SpecificationDetail, Tag("detail")],
    ],
    Discriminator(_specification_kind),
]


class VariantOptionIn(_SubmissionModel):
    name: str = Field(min_length=1, max_length=100)
    price_adjustment: PriceAdjustment = Decimal("0")
    stock: int = Field(0, ge=0)


class VariantTypeIn(_SubmissionModel):
    type_name: str = Field(min_length=1, max_length=100)
    options: List[VariantOptionIn] = Field(min_length=1)


class ColorVariantIn(_SubmissionModel):
    color_name: str = Field(min_length=1, max_length=100)
    color_code: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    images: List[ImageUrl] = Field(min_length=1)
    stock: int = Field(0, ge=0)


class ProductSubmission(_SubmissionModel):
    """
    A product as submitted by the admin form, after validation.

    Field order matters: the cross-field checks read previously validated
    fields (base_price before crossing_price, status before scheduled_at).
    """

    name: str = Field(min_length=3, max_length=500)
    description: str = Field(min_length=10, max_length=5000)
    category_id: int = Field(gt=0)
    subcategory_id: Optional[int] = Field(None, gt=0)
    brand_id: Optional[int] = Field(None, gt=0)
    base_price: Price
    crossing_price: Optional[Price] = None
    variant_types: List[VariantTypeIn] = Field(min_length=1)
    color_variants: List[ColorVariantIn] = Field(default_factory=list)
    specifications: List[Specification] = Field(default_factory=list)
    images: List[ImageUrl] = Field(min_length=1)
    status: ProductStatus
    scheduled_at: Optional[datetime] = Field(None, validate_default=True)

    @field_validator("color_variants", "specifications", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v

    @field_validator("crossing_price")
    @classmethod
    def _crossing_above_base(cls, v, info: ValidationInfo):
        base = info.data.get("base_price")
        if v is not None and base is not None and v <= base:
            raise PydanticCustomError(
                "crossing_price", "Crossing price must be greater than base price"
            )
        return v

    @field_validator("scheduled_at", mode="before")
    @classmethod
    def _scheduled_only_when_scheduled(cls, v, info: ValidationInfo):
        if info.data.get("status") != ProductStatus.SCHEDULED:
            return None
        if v is None or v == "":
            raise PydanticCustomError(
                "scheduled_at_required",
                "Scheduled date is required when status is set to scheduled",
            )
        return v

    @property
    def axis_sizes(self) -> List[int]:
        return [len(vt.options) for vt in self.variant_types]

    def specifications_json(self) -> List[Dict[str, Any]]:
        return [s.model_dump(by_alias=True) for s in self.specifications]


def flatten_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """ValidationError -> {"variantTypes.0.options": ["List should have at least 1 item ..."]}"""
    details: Dict[str, List[str]] = {}
    for err in exc.errors():
        # validated defaults are located by field name, not alias
        path = ".".join(
            to_camel(p) if isinstance(p, str) and "_" in p else str(p)
            for p in err["loc"]
        ) or ROOT_ERROR_PATH
        details.setdefault(path, []).append(err["msg"])
    return details


def validate_product_submission(
    payload: Any,
) -> Tuple[Optional[ProductSubmission], Optional[Dict[str, List[str]]]]:
    """
    Returns (record, None) when the payload is a valid product or
    (None, {field_path: [messages]}) when it is not. Never raises for bad input.
    A JSON document (str/bytes) is accepted as well as an already decoded dict.
    """
    try:
        if isinstance(payload, (str, bytes, bytearray)):
            record = ProductSubmission.model_validate_json(payload)
        else:
            record = ProductSubmission.model_validate(payload)
    except ValidationError as exc:
        return None, flatten_errors(exc)
    return record, None


class _OutModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class VariantOptionOut(_OutModel):
    id: int
    name: str
    price_adjustment: Decimal
    stock: int


class VariantTypeOut(_OutModel):
    id: int
    type_name: str
    options: List[VariantOptionOut] = []


class ColorVariantOut(_OutModel):
    id: int
    color_name: str
    color_code: Optional[str] = None
    images: List[str] = []
    stock: int


class ProductVariantOut(_OutModel):
    id: int
    sku: str
    variant_option_ids: List[int]
    color_variant_id: Optional[int] = None
    final_price: Decimal
    stock: int


class ProductOut(_OutModel):
    id: int
    name: str
    slug: str
    description: str
    category_id: int
    subcategory_id: Optional[int] = None
    brand_id: Optional[int] = None
    base_price: Decimal
    crossing_price: Optional[Decimal] = None
    images: List[str] = []
    specifications: List[Any] = []
    status: str
    scheduled_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    variant_types: List[VariantTypeOut] = []
    color_variants: List[ColorVariantOut] = []
    variants: List[ProductVariantOut] = []
