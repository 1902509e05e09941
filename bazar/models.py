# bazar/models.py
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any

class Product(BaseModel):
    # Wire names are camelCase; anything we don't model passes through.
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: str = ""
    name: str = ""
    title: str = ""
    price: float = Field(default=0.0, ge=0)
    old_price: Optional[float] = Field(default=None, alias="oldPrice")
    stock: int = Field(default=0, ge=0)
    description: str = ""
    category_id: str = Field(default="", alias="categoryId")
    image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    is_new: bool = Field(default=False, alias="isNew")
    is_featured: bool = Field(default=False, alias="isFeatured")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str

class Phase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
