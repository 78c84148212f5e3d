from ..fixtures import VENDOR
from ..locators import by_css, by_role, by_test_id, by_text, ci
from ..models import FlowModule, FlowSpec
from .base import MenuListFlow, RecordDetailFlow


class VendorList(MenuListFlow):
    spec = FlowSpec(
        id="vendor-list",
        title="View Vendor List",
        description="Navigate to the vendors section and view all registered vendors.",
        module=FlowModule.VENDORS,
        tags=("vendors", "list", "navigation", "suppliers"),
        preconditions=("You are logged into TERP",),
    )
    menu_label = "Vendors menu"
    menu_strategies = [
        by_test_id("nav-vendors"),
        by_role("link", ci("vendors|suppliers")),
        by_text(ci("^vendors$")),
        by_css('a[href*="vendors"], [data-nav="vendors"]'),
    ]
    verifications = [
        ("Vendors list loaded", "The vendors list shows all your product suppliers"),
        ("View vendor records", "Each vendor entry shows company name, contact info, and product categories they supply"),
    ]


class VendorDetail(RecordDetailFlow):
    spec = FlowSpec(
        id="vendor-detail",
        title="View Vendor Details",
        description="Learn how to view detailed information about a specific vendor.",
        module=FlowModule.VENDORS,
        tags=("vendors", "detail", "view", "suppliers"),
        preconditions=("You are logged into TERP", "The vendor exists in the system"),
    )
    list_path = "/vendors"
    list_label = "Vendors page"
    record_label = f"Vendor: {VENDOR.name}"
    record_key = VENDOR.email
    data_attribute = "vendor"
    click_notes = "Click on the vendor to view their details"
    verifications = [
        ("Vendor details loaded", "The vendor detail page shows contact information, products supplied, and order history"),
        ("Review vendor information", "Check contact details, product catalog from this vendor, and past transactions"),
    ]
