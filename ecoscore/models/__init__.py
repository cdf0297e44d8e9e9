from ecoscore.models.user import User
from ecoscore.models.product import Product
from ecoscore.models.favorite import Favorite
from ecoscore.models.comparison import Comparison
from ecoscore.models.batch_share import BatchShare
from ecoscore.models.notification import Notification
from ecoscore.models.user_preference import UserPreference

__all__ = [
    "User",
    "Product",
    "Favorite",
    "Comparison",
    "BatchShare",
    "Notification",
    "UserPreference",
]
