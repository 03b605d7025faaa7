from typing import Optional
from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _ReferenceOut(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class CategoryOut(_ReferenceOut):
    id: int
    name: str
    slug: str


class SubcategoryOut(_ReferenceOut):
    id: int
    category_id: int
    name: str
    slug: str


class BrandOut(_ReferenceOut):
    id: int
    name: str
    slug: str
    logo: Optional[str] = None
