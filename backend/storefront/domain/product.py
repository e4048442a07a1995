"""
Product Domain Model

Represents a catalog product and its age-restriction policy.

The policy is a closed sum type: a product is either Unrestricted or
Restricted to buyers of at least `minimum_age`. The stored and wire form is the
flag pair {required, age}; AgeRequirement converts between the two.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Annotated, Optional, Union, Literal
from datetime import datetime
from decimal import Decimal


class Unrestricted(BaseModel):
    """Anyone may buy the product"""

    kind: Literal["unrestricted"] = "unrestricted"

    model_config = ConfigDict(frozen=True)

    def permits(self, age: int) -> bool:
        return True

    def to_requirement(self) -> "AgeRequirement":
        return AgeRequirement(required=False, age=0)


class Restricted(BaseModel):
    """Only buyers aged `minimum_age` or older may buy the product"""

    kind: Literal["restricted"] = "restricted"
    minimum_age: int = Field(..., ge=0, description="Minimum buyer age")

    model_config = ConfigDict(frozen=True)

    def permits(self, age: int) -> bool:
        return age >= self.minimum_age

    def to_requirement(self) -> "AgeRequirement":
        return AgeRequirement(required=True, age=self.minimum_age)


AgePolicy = Annotated[Union[Unrestricted, Restricted], Field(discriminator="kind")]


class AgeRequirement(BaseModel):
    """
    Flag-pair form of the age policy, as stored and exchanged over the API.

    `required=False` means no restriction whatever `age` says.
    """

    required: bool = False
    age: int = Field(0, ge=0)

    def to_policy(self) -> Union[Unrestricted, Restricted]:
        if not self.required:
            return Unrestricted()
        return Restricted(minimum_age=self.age)


class Product(BaseModel):
    """
    Product domain model - represents a product in the catalog

    Fields:
        id: Opaque product identifier (UUID string)
        name: Product name
        description: Product description (optional)
        price: Unit price
        discount: Advertised discount; informational, orders carry their own amounts
        age_policy: Unrestricted or Restricted{minimum_age}
        created_at: When product was created
        updated_at: When product was last updated
    """

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(Decimal("0"), description="Unit price", ge=0, max_digits=12, decimal_places=2)
    discount: Decimal = Field(Decimal("0"), description="Advertised discount", ge=0, max_digits=12, decimal_places=2)
    age_policy: AgePolicy = Field(default_factory=Unrestricted, description="Age-restriction policy")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_age_restricted(self) -> bool:
        return isinstance(self.age_policy, Restricted)

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump(mode="json", exclude={"price", "discount"})
        data["price"] = float(self.price)
        data["discount"] = float(self.discount)
        data["age_required"] = self.age_policy.to_requirement().model_dump()
        return data


class ProductCreate(BaseModel):
    """Schema for creating a new product"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    discount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    age_required: AgeRequirement = Field(default_factory=AgeRequirement)

    def to_age_policy(self) -> Union[Unrestricted, Restricted]:
        return self.age_required.to_policy()
