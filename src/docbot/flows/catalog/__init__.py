"""Built-in flows documenting the TERP application, in registration order."""

from .auth import AuthLogin, AuthLogout
from .clients import ClientDetail, ClientList, ClientSearch
from .dashboard import DashboardOverview
from .inventory import BatchDetail, InventoryList
from .invoices import InvoiceDetail, InvoiceFilterOverdue, InvoiceList
from .orders import OrderCreateDraft, OrderDetail, OrderFilterStatus, OrderList
from .pricing import PricingRules
from .products import ProductCatalog, ProductDetail
from .settings import SettingsBasic
from .vendors import VendorDetail, VendorList

BUILTIN_FLOWS = (
    AuthLogin,
    AuthLogout,
    DashboardOverview,
    ClientList,
    ClientSearch,
    ClientDetail,
    VendorList,
    VendorDetail,
    ProductCatalog,
    ProductDetail,
    InventoryList,
    BatchDetail,
    OrderList,
    OrderFilterStatus,
    OrderDetail,
    OrderCreateDraft,
    InvoiceList,
    InvoiceFilterOverdue,
    InvoiceDetail,
    PricingRules,
    SettingsBasic,
)

__all__ = ["BUILTIN_FLOWS"]
