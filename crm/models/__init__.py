from .activity_log import ActivityLog
from .base import Base
from .business_settings import BusinessSettings
from .client import Client
from .invoice import Invoice, InvoiceStatusEnum
from .invoice_item import InvoiceItem
from .invoice_sequence import InvoiceSequence
from .lead import Lead, LeadSourceEnum, LeadStatusEnum
from .service import Service
from .task import Task, TaskPriorityEnum, TaskStatusEnum

__all__ = [
    "ActivityLog",
    "Base",
    "BusinessSettings",
    "Client",
    "Invoice",
    "InvoiceStatusEnum",
    "InvoiceItem",
    "InvoiceSequence",
    "Lead",
    "LeadSourceEnum",
    "LeadStatusEnum",
    "Service",
    "Task",
    "TaskPriorityEnum",
    "TaskStatusEnum",
]
