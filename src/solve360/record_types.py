"""Built-in field mapping tables for the standard Solve360 record types.

Custom fields (``custom12345`` style identifiers) differ per account and are
added by defining the type in your own registry instead of using
default_registry().
"""

from __future__ import annotations

from src.solve360.field_mapping import FieldMappingRegistry

CONTACT_FIELDS: dict[str, str] = {
    "First Name": "firstname",
    "Middle Name": "middlename",
    "Last Name": "lastname",
    "Salutation": "salutation",
    "Job Title": "jobtitle",
    "Business Email": "businessemail",
    "Personal Email": "personalemail",
    "Other Email": "otheremail",
    "Business Phone": "businessphonedirect",
    "Main Phone": "businessphonemain",
    "Extension": "businessphoneextension",
    "Mobile Phone": "cellularphone",
    "Home Phone": "homephone",
    "Business Fax": "businessfax",
    "Website": "website",
    "Business Address": "businessaddress",
    "Home Address": "homeaddress",
    "Background": "background",
}

COMPANY_FIELDS: dict[str, str] = {
    "Company Name": "name",
    "Main Phone": "mainphone",
    "Fax": "fax",
    "Website": "website",
    "Billing Address": "billingaddress",
    "Shipping Address": "shippingaddress",
    "Mailing Address": "mailingaddress",
    "Background": "background",
}


def default_registry() -> FieldMappingRegistry:
    """Registry with the Contact and Company tables defined."""
    registry = FieldMappingRegistry()
    registry.define("Contact", CONTACT_FIELDS)
    registry.define("Company", COMPANY_FIELDS)
    return registry
