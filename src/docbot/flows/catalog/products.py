from ..fixtures import PRODUCTS
from ..locators import by_css, by_role, by_test_id, by_text, ci
from ..models import FlowModule, FlowSpec
from .base import MenuListFlow, RecordDetailFlow


class ProductCatalog(MenuListFlow):
    spec = FlowSpec(
        id="product-catalog",
        title="View Product Catalog",
        description="Navigate to the products section and browse the product catalog.",
        module=FlowModule.PRODUCTS,
        tags=("products", "catalog", "list", "navigation"),
        preconditions=("You are logged into TERP",),
    )
    menu_label = "Products menu"
    menu_strategies = [
        by_test_id("nav-products"),
        by_role("link", ci("products")),
        by_text(ci("^products$")),
        by_css('a[href*="products"], [data-nav="products"]'),
    ]
    verifications = [
        ("Product catalog loaded", "The product catalog displays all available products"),
        (
            "Browse products",
            "Products are listed with SKU, name, category, and current inventory levels. Click a product for details.",
        ),
    ]


class ProductDetail(RecordDetailFlow):
    spec = FlowSpec(
        id="product-detail",
        title="View Product Details",
        description="Learn how to view detailed information about a specific product.",
        module=FlowModule.PRODUCTS,
        tags=("products", "detail", "view", "sku"),
        preconditions=("You are logged into TERP", "The product exists in the catalog"),
    )
    list_path = "/products"
    list_label = "Products page"
    record_label = f"Product: {PRODUCTS[0].sku}"
    record_key = PRODUCTS[0].sku
    data_attribute = "sku"
    click_notes = "Click on the product to view details"
    verifications = [
        ("Product details loaded", "The product detail page shows complete product information, inventory, and pricing"),
        ("Review product information", "Check specifications, current stock levels, pricing tiers, and related batches"),
    ]
