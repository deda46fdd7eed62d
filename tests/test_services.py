# tests/test_services.py
from datetime import datetime, timezone

import pytest
from bson import ObjectId

from catalog.core.errors import Conflict, Expired, NotFound
from catalog.domain.models.product import ProductCreate, ProductUpdate
from catalog.domain.models.promo import PromoCreate
from catalog.domain.services.filters import ProductFilter


@pytest.mark.anyio
async def test_created_at_comes_from_the_clock(ctx, clock):
    p = await ctx.products.create_product(ProductCreate(name="Robe", price=10, category="robes"))
    assert p.createdAt == clock.current
    again = await ctx.products.get_product(p.id)
    assert again.createdAt == p.createdAt


@pytest.mark.anyio
async def test_similar_for_missing_reference_raises(ctx):
    await ctx.products.create_product(ProductCreate(name="Robe", price=10, category="robes"))
    with pytest.raises(NotFound):
        await ctx.products.get_similar_products(str(ObjectId()))


@pytest.mark.anyio
async def test_similar_with_a_lone_product_is_empty(ctx):
    p = await ctx.products.create_product(ProductCreate(name="Robe", price=10, category="robes"))
    assert await ctx.products.get_similar_products(p.id) == []


@pytest.mark.anyio
async def test_update_with_nothing_to_change_returns_current(ctx):
    p = await ctx.products.create_product(ProductCreate(name="Robe", price=10, category="robes"))
    assert await ctx.products.update_product(p.id, ProductUpdate()) == p


@pytest.mark.anyio
async def test_update_can_clear_description(ctx):
    p = await ctx.products.create_product(ProductCreate(name="Robe", price=10, category="robes", description="x"))
    updated = await ctx.products.update_product(p.id, ProductUpdate(description=None))
    assert updated.description is None


@pytest.mark.anyio
async def test_listing_through_service(ctx):
    await ctx.products.create_product(ProductCreate(name="a", price=1, category="c1", featured=True))
    await ctx.products.create_product(ProductCreate(name="b", price=1, category="c2"))
    items = await ctx.products.list_products(ProductFilter(featured=True))
    assert [p.name for p in items] == ["a"]


@pytest.mark.anyio
async def test_naive_expiry_stored_by_other_writers_is_utc(ctx, db):
    await db["promocodes"].insert_one({"code": "LEGACY", "discount": 5, "expiresAt": datetime(2000, 1, 1), "active": True})
    with pytest.raises(Expired):
        await ctx.promos.get_promo("legacy")


@pytest.mark.anyio
async def test_promo_without_expiry_never_expires(ctx):
    await ctx.promos.create_promo(PromoCreate(code="forever", discount=12))
    res = await ctx.promos.get_promo("FOREVER")
    assert res.discount == 12


@pytest.mark.anyio
async def test_expiry_in_the_future_is_valid(ctx):
    await ctx.promos.create_promo(PromoCreate(code="SOON", discount=7, expiresAt=datetime(2099, 1, 1, tzinfo=timezone.utc)))
    assert (await ctx.promos.get_promo("soon")).discount == 7


@pytest.mark.anyio
async def test_duplicate_promo_raises_conflict(ctx):
    await ctx.promos.repo.ensure_indexes()
    await ctx.promos.create_promo(PromoCreate(code="WELCOME", discount=10))
    with pytest.raises(Conflict):
        await ctx.promos.create_promo(PromoCreate(code="welcome", discount=20))
    first = await ctx.promos.repo.find_active("WELCOME")
    assert first.discount == 10


@pytest.mark.anyio
async def test_blank_code_lookup_is_not_found(ctx):
    with pytest.raises(NotFound):
        await ctx.promos.get_promo("   ")


@pytest.mark.anyio
async def test_promo_expiry_is_returned_as_stored(ctx):
    expires = datetime(2099, 1, 1, 12, 30, 0, 987654, tzinfo=timezone.utc)
    created = await ctx.promos.create_promo(PromoCreate(code="MILLI", discount=3, expiresAt=expires))
    stored = await ctx.promos.repo.find_active("MILLI")
    assert created.expiresAt == stored.expiresAt
    assert created.expiresAt.microsecond == 987000
