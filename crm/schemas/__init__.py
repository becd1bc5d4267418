from .activity import ActivityRead, DashboardStats
from .business_settings import BusinessSettingsRead, BusinessSettingsUpdate
from .client import ClientCreate, ClientRead, ClientUpdate
from .invoice import (
    InvoiceCreate,
    InvoiceItemIn,
    InvoiceItemRead,
    InvoicePreview,
    InvoiceRead,
    InvoiceStatusUpdate,
    InvoiceTotalsRead,
)
from .lead import (
    LeadConversion,
    LeadCreate,
    LeadRead,
    LeadStatusMessage,
    LeadStatusResponseUpdate,
    LeadUpdate,
    SheetSyncResult,
)
from .report import ReportSummary
from .service import ServiceCreate, ServiceRead, ServiceUpdate
from .task import TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "ActivityRead",
    "BusinessSettingsRead",
    "BusinessSettingsUpdate",
    "ClientCreate",
    "ClientRead",
    "ClientUpdate",
    "DashboardStats",
    "InvoiceCreate",
    "InvoiceItemIn",
    "InvoiceItemRead",
    "InvoicePreview",
    "InvoiceRead",
    "InvoiceStatusUpdate",
    "InvoiceTotalsRead",
    "LeadConversion",
    "LeadCreate",
    "LeadRead",
    "LeadStatusMessage",
    "LeadStatusResponseUpdate",
    "LeadUpdate",
    "ReportSummary",
    "ServiceCreate",
    "ServiceRead",
    "ServiceUpdate",
    "SheetSyncResult",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
