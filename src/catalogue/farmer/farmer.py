"""Farmer aggregate."""

from protean.fields import Identifier, Integer, List, String, Text

from catalogue.domain import catalogue


@catalogue.aggregate
class Farmer:
    """A partner farmer listed on the storefront."""

    id: Identifier(identifier=True)
    name: String(required=True, max_length=100)
    farm_name: String(max_length=150)
    location: String(max_length=150)
    specialties: List(content_type=String)
    years_experience: Integer(min_value=0)
    certification: String(max_length=100)
    contact: String(max_length=20)
    image: String(max_length=500)
    description: Text()

    @classmethod
    def from_feed(cls, record):
        return cls(
            id=record["id"],
            name=record["name"],
            farm_name=record.get("farmName"),
            location=record.get("location"),
            specialties=list(record.get("specialties") or []),
            years_experience=record.get("yearsExperience"),
            certification=record.get("certification"),
            contact=record.get("contact"),
            image=record.get("image"),
            description=record.get("description"),
        )
