# Importing every model registers its table on Base.metadata
from sitekit.backend.models.base import Base
from sitekit.backend.models.blog import BlogPost, BlogTag, blog_post_tags
from sitekit.backend.models.booking import Booking, BookingService
from sitekit.backend.models.cart import CartItem, CheckoutOrder, CheckoutOrderItem
from sitekit.backend.models.catalog import CatalogImage, CatalogProduct
from sitekit.backend.models.category import Category
from sitekit.backend.models.faq import FaqCategory, FaqItem
from sitekit.backend.models.gallery import GalleryAlbum, GalleryPhoto
from sitekit.backend.models.hexagon import Hexagon
from sitekit.backend.models.newsletter import Campaign, Subscriber
from sitekit.backend.models.order import Order
from sitekit.backend.models.portfolio import (
    PortfolioImage,
    PortfolioProject,
    PortfolioTranslation,
)
from sitekit.backend.models.product import Product, ProductTranslation
from sitekit.backend.models.review import Review
from sitekit.backend.models.site import SiteContact, SiteSetting
from sitekit.backend.models.subscription import (
    Subscription,
    SubscriptionPayment,
    SubscriptionPlan,
)
from sitekit.backend.models.user import User

__all__ = [
    "Base",
    "BlogPost",
    "BlogTag",
    "Booking",
    "BookingService",
    "Campaign",
    "CartItem",
    "CatalogImage",
    "CatalogProduct",
    "Category",
    "CheckoutOrder",
    "CheckoutOrderItem",
    "FaqCategory",
    "FaqItem",
    "GalleryAlbum",
    "GalleryPhoto",
    "Hexagon",
    "Order",
    "PortfolioImage",
    "PortfolioProject",
    "PortfolioTranslation",
    "Product",
    "ProductTranslation",
    "Review",
    "SiteContact",
    "SiteSetting",
    "Subscriber",
    "Subscription",
    "SubscriptionPayment",
    "SubscriptionPlan",
    "User",
    "blog_post_tags",
]
