"""Record types registered with the API at startup."""
from dataclasses import dataclass, field
from datetime import datetime

from registry import Registry


@dataclass
class ContactForm:
    name: str = field(default="", metadata={"form": "category=Personal"})
    email: str = field(default="", metadata={"form": "category=Personal"})
    role: str = field(default="", metadata={"form": "category=Work"})
    bio: str = field(default="", metadata={"form": "category=Work;multiline"})


@dataclass
class Address:
    street: str = ""
    city: str = field(default="", metadata={"form": "layoutGroup=place"})
    zip: str = field(default="", metadata={"form": "layoutGroup=place"})


@dataclass
class OrderLine:
    sku: str = field(default="", metadata={"required": "true", "form": "layout=horizontal"})
    qty: int = field(default=1, metadata={"default": "1", "minimum": "1", "form": "layout=horizontal"})


@dataclass
class CustomerForm:
    first_name: str = field(
        default="",
        metadata={"required": "true", "i18n": "customer.first_name", "form": "layout=horizontal"},
    )
    last_name: str = field(
        default="",
        metadata={"required": "true", "i18n": "customer.last_name", "form": "layout=horizontal"},
    )
    active: bool = field(default=True, metadata={"default": "true"})
    tier: str = field(default="basic", metadata={"enum": "basic,pro,enterprise", "default": "basic"})
    address: Address = field(default_factory=Address, metadata={"visibleIf": "active=true"})
    lines: list[OrderLine] = field(default_factory=list)
    notes: str = field(default="", metadata={"form": "multiline"})
    created_at: datetime | None = field(default=None, metadata={"form": "readonly"})


DEMO_TYPES = {
    "ContactForm": ContactForm,
    "CustomerForm": CustomerForm,
}


def register_demo_types(registry: Registry) -> None:
    for name, record in DEMO_TYPES.items():
        registry.register(name, record)
