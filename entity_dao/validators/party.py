"""
Field validations for parties (persons and organizations) and their contact
information.

Rules:

- The type must be "person" or "organization" and must match the kind of
  party: a person entity for "person", an organization entity for
  "organization". A party with a wrong type is not validated any further.
- The account id is optional, but when present it must not be blank.
- A person needs a first name, an organization a name.
- A party needs at least one email, without duplicated addresses and with
  exactly one primary email.
- Phones and postal addresses are optional; when present exactly one entry
  of each list must be primary.
"""

from typing import List, Sequence

from entity_dao.domain import (
    PARTY_CLASSES,
    PARTY_TYPE_ORGANIZATION,
    PARTY_TYPE_PERSON,
    ContactMethod,
    FieldError,
    PartyEntity,
)
from entity_dao.persistence.ids import is_blank

from .common import require_not_blank

TYPE = "type"
ID_ACCOUNT = "id_account"
NAME = "name"
FIRST_NAME = "name.first"
CONTACTS_EMAILS = "emails"
CONTACT_PHONE_NUMBER = "phones"
CONTACT_ADDRESSES = "addresses"

TYPE_EMPTY = "Type is empty"
TYPE_INVALID = (
    f"Type is not {PARTY_TYPE_PERSON} or {PARTY_TYPE_ORGANIZATION}"
)
TYPE_MISMATCH = "Type does not match the kind of party"
ID_ACCOUNT_EMPTY = "The account id is defined but empty"
NAME_EMPTY = "Name is empty"
FIRST_NAME_EMPTY = "First name is empty"
AT_LEAST_ONE_EMAIL = "The party must have at least one email"
EMAIL_ADDRESS_EMPTY = "Email address is empty"
DUPLICATED_EMAILS = "There are duplicated email addresses"
NO_PRIMARY_CONTACT = "There is no contact marked as primary"
MORE_THAN_ONE_PRIMARY_CONTACT = (
    "There is more than one contact marked as primary"
)


def validate_party(party: PartyEntity) -> List[FieldError]:
    if is_blank(party.type):
        return [FieldError(attribute=TYPE, message=TYPE_EMPTY, value="")]
    if party.type not in (PARTY_TYPE_PERSON, PARTY_TYPE_ORGANIZATION):
        return [
            FieldError(attribute=TYPE, message=TYPE_INVALID, value=party.type)
        ]
    if not isinstance(party, PARTY_CLASSES[party.type]):
        return [
            FieldError(
                attribute=TYPE, message=TYPE_MISMATCH, value=party.type
            )
        ]

    errors: List[FieldError] = []
    if party.id_account is not None and is_blank(party.id_account):
        errors.append(
            FieldError(
                attribute=ID_ACCOUNT,
                message=ID_ACCOUNT_EMPTY,
                value=party.id_account,
            )
        )

    name = party.name  # type: ignore[attr-defined]
    if party.type == PARTY_TYPE_PERSON:
        require_not_blank(errors, FIRST_NAME, FIRST_NAME_EMPTY, name.first)
    else:
        require_not_blank(errors, NAME, NAME_EMPTY, name)

    errors.extend(validate_emails(party))
    errors.extend(validate_primary(party.phones, CONTACT_PHONE_NUMBER))
    errors.extend(validate_primary(party.addresses, CONTACT_ADDRESSES))
    return errors


def validate_emails(party: PartyEntity) -> List[FieldError]:
    if not party.emails:
        return [
            FieldError(attribute=CONTACTS_EMAILS, message=AT_LEAST_ONE_EMAIL)
        ]

    errors: List[FieldError] = []
    addresses = [email.address for email in party.emails]
    for address in addresses:
        require_not_blank(
            errors, CONTACTS_EMAILS, EMAIL_ADDRESS_EMPTY, address
        )
    filled = [address for address in addresses if not is_blank(address)]
    if len(set(filled)) != len(filled):
        errors.append(
            FieldError(attribute=CONTACTS_EMAILS, message=DUPLICATED_EMAILS)
        )
    if errors:
        return errors
    return validate_primary(party.emails, CONTACTS_EMAILS)


def validate_primary(
    contacts: Sequence[ContactMethod], attribute: str
) -> List[FieldError]:
    """Exactly one contact of a non-empty list must be primary."""
    if not contacts:
        return []
    primary_count = sum(1 for contact in contacts if contact.primary)
    if primary_count == 0:
        return [FieldError(attribute=attribute, message=NO_PRIMARY_CONTACT)]
    if primary_count > 1:
        return [
            FieldError(
                attribute=attribute, message=MORE_THAN_ONE_PRIMARY_CONTACT
            )
        ]
    return []
