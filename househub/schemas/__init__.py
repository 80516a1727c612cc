from househub.schemas.auth import Token, UserCreate, UserLogin, UserResponse
from househub.schemas.property import PropertyCreate, PropertyResponse
from househub.schemas.reservation import ReservationCreate, ReservationResponse, CompanionIn
from househub.schemas.task import TaskCreate, TaskResponse
from househub.schemas.inventory import InventoryItemCreate, InventoryItemResponse, StapleResponse
from househub.schemas.recommendation import RecommendationCreate, RecommendationResponse
from househub.schemas.guest_book import GuestBookEntryCreate, GuestBookEntryResponse
from househub.schemas.walkthrough import WalkthroughSectionCreate, WalkthroughSectionResponse
