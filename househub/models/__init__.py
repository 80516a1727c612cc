"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table.
"""
from househub.models.user import User
from househub.models.property import Property
from househub.models.reservation import Reservation, Companion, ReservationApproval
from househub.models.task import Task
from househub.models.inventory import InventoryItem, DefaultStaple, CustomStaple
from househub.models.recommendation import Recommendation
from househub.models.guest_book import GuestBookEntry, GuestBookPhoto
from househub.models.walkthrough import WalkthroughSection, WalkthroughStep
from househub.models.contact import Contact
from househub.models.cleaning import CleaningTask, CleaningVisit, CleaningVisitTask, CleaningIssue

__all__ = [
    "User",
    "Property",
    "Reservation",
    "Companion",
    "ReservationApproval",
    "Task",
    "InventoryItem",
    "DefaultStaple",
    "CustomStaple",
    "Recommendation",
    "GuestBookEntry",
    "GuestBookPhoto",
    "WalkthroughSection",
    "WalkthroughStep",
    "Contact",
    "CleaningTask",
    "CleaningVisit",
    "CleaningVisitTask",
    "CleaningIssue",
]
