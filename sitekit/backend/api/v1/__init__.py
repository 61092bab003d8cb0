"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from sitekit.backend.api.v1.endpoints import (
    auth,
    blog,
    bookings,
    cart,
    catalog,
    categories,
    configurator,
    contacts,
    faq,
    gallery,
    hexagons,
    leads,
    newsletter,
    orders,
    portfolio,
    products,
    public,
    reviews,
    settings,
    subscriptions,
    users,
)

router = APIRouter()

# Admin panel core
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(hexagons.router, prefix="/hexagons", tags=["hexagons"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
router.include_router(portfolio.router, prefix="/portfolio", tags=["portfolio"])

# Storefront and lead capture
router.include_router(public.router, prefix="/public", tags=["public"])
router.include_router(leads.router, prefix="/leads", tags=["leads"])
router.include_router(configurator.router, prefix="/configurator", tags=["configurator"])

# Optional modules
router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
router.include_router(cart.router, prefix="/cart", tags=["cart"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(blog.router, prefix="/blog", tags=["blog"])
router.include_router(faq.router, prefix="/faq", tags=["faq"])
router.include_router(newsletter.router, prefix="/newsletter", tags=["newsletter"])
router.include_router(subscriptions.router, prefix="/subscriptions", tags=["subscriptions"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
router.include_router(gallery.router, prefix="/gallery", tags=["gallery"])
