"""
Party domain models.

A party is either a person or an organization. Both carry the same contact
information: email addresses, phone numbers and postal addresses. Each
contact method has a free-form type (usually "work", "home" or "other")
and a primary flag; inside one list exactly one entry should be primary.

Parties are stored in a single collection and told apart by their type
attribute, see PARTY_TYPE_PERSON and PARTY_TYPE_ORGANIZATION.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .base import Entity

PARTY_TYPE_PERSON = "person"
PARTY_TYPE_ORGANIZATION = "organization"


class ContactMethod(BaseModel):
    """Common attributes of every contact method."""

    type: Optional[str] = Field(
        default=None,
        description="Label of the preferred function, such as work or home",
    )
    primary: bool = Field(
        default=False,
        description="Whether this is the preferred entry of its list",
    )


class EmailAddress(ContactMethod):
    address: Optional[str] = None


class PhoneNumber(ContactMethod):
    number: Optional[str] = None
    extension: Optional[str] = None
    area_code: Optional[str] = None
    country_code: Optional[str] = None


class PostalAddress(ContactMethod):
    lines: List[str] = Field(default_factory=list)
    city_text: Optional[str] = None
    id_city: Optional[str] = None
    postal_code: Optional[str] = None
    state_text: Optional[str] = None
    id_state_province: Optional[str] = None
    country_iso_code: Optional[str] = None


class PersonName(BaseModel):
    first: Optional[str] = None
    middle: Optional[str] = None
    last: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None


class PartyEntity(Entity):
    """Fields shared by persons and organizations."""

    type: Optional[str] = None
    id_account: Optional[str] = None
    display_name: Optional[str] = None
    emails: List[EmailAddress] = Field(default_factory=list)
    phones: List[PhoneNumber] = Field(default_factory=list)
    addresses: List[PostalAddress] = Field(default_factory=list)


class PersonEntity(PartyEntity):
    type: Optional[str] = PARTY_TYPE_PERSON
    name: PersonName = Field(default_factory=PersonName)


class OrganizationEntity(PartyEntity):
    type: Optional[str] = PARTY_TYPE_ORGANIZATION
    name: Optional[str] = None


PARTY_CLASSES = {
    PARTY_TYPE_PERSON: PersonEntity,
    PARTY_TYPE_ORGANIZATION: OrganizationEntity,
}
