"""Supplier records."""

from __future__ import annotations

from dataclasses import dataclass, fields

from ims.domain.exceptions import ValidationError


@dataclass
class Supplier:

    id: str | None
    company: str
    location: str
    contact: str
    email: str
    material: str

    @staticmethod
    def create(
        company: str,
        location: str,
        contact: str,
        email: str,
        material: str,
    ) -> Supplier:
        supplier = Supplier(
            id=None,
            company=company.strip(),
            location=location.strip(),
            contact=contact.strip(),
            email=email.strip(),
            material=material.strip(),
        )
        for f in fields(supplier):
            if f.name != "id" and not getattr(supplier, f.name):
                raise ValidationError(f"Supplier {f.name} is required")
        if "@" not in supplier.email:
            raise ValidationError(f"Invalid supplier email: {supplier.email!r}")
        return supplier
