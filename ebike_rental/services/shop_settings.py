"""Shop settings and pricing table access."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings, settings
from ..models.shop_settings import ShopSettings
from ..repositories import shop_settings as settings_repo
from ..schemas import shop_settings as schemas
from .pricing import PricingTable

logger = logging.getLogger(__name__)


def default_payload(config: Settings = settings) -> schemas.ShopSettingsPayload:
    """Settings used until the shop saves its own."""

    return schemas.ShopSettingsPayload(
        shop_name=config.shop_name,
        phone=config.shop_phone,
        email=config.shop_email,
        opening_time=config.opening_time,
        closing_time=config.closing_time,
        pricing=schemas.Pricing(
            hourly=config.price_hourly,
            half_day=config.price_half_day,
            full_day=config.price_full_day,
            trailer_hourly=config.price_trailer_hourly,
            trailer_half_day=config.price_trailer_half_day,
            trailer_full_day=config.price_trailer_full_day,
            guide_hourly=config.price_guide_hourly,
        ),
    )


def payload_from_row(row: ShopSettings) -> schemas.ShopSettingsPayload:
    return schemas.ShopSettingsPayload(
        shop_name=row.shop_name,
        phone=row.phone,
        email=row.email,
        opening_time=row.opening_time,
        closing_time=row.closing_time,
        pricing=schemas.Pricing(
            hourly=row.pricing_hourly,
            half_day=row.pricing_half_day,
            full_day=row.pricing_full_day,
            trailer_hourly=row.pricing_trailer_hourly,
            trailer_half_day=row.pricing_trailer_half_day,
            trailer_full_day=row.pricing_trailer_full_day,
            guide_hourly=row.pricing_guide_hourly,
        ),
    )


def row_fields(payload: schemas.ShopSettingsPayload) -> dict[str, object]:
    pricing = payload.pricing
    return {
        "shop_name": payload.shop_name,
        "phone": payload.phone,
        "email": payload.email,
        "opening_time": payload.opening_time,
        "closing_time": payload.closing_time,
        "pricing_hourly": pricing.hourly,
        "pricing_half_day": pricing.half_day,
        "pricing_full_day": pricing.full_day,
        "pricing_trailer_hourly": pricing.trailer_hourly,
        "pricing_trailer_half_day": pricing.trailer_half_day,
        "pricing_trailer_full_day": pricing.trailer_full_day,
        "pricing_guide_hourly": pricing.guide_hourly,
    }


def pricing_table(payload: schemas.ShopSettingsPayload) -> PricingTable:
    pricing = payload.pricing
    return PricingTable(
        hourly=pricing.hourly,
        half_day=pricing.half_day,
        full_day=pricing.full_day,
        trailer_hourly=pricing.trailer_hourly,
        trailer_half_day=pricing.trailer_half_day,
        trailer_full_day=pricing.trailer_full_day,
        guide_hourly=pricing.guide_hourly,
    )


async def get_shop_settings(session: AsyncSession) -> schemas.ShopSettingsPayload:
    """Return stored settings, falling back to configured defaults."""

    row = await settings_repo.get_settings(session)
    if row is None:
        return default_payload()
    return payload_from_row(row)


async def get_pricing_table(session: AsyncSession) -> PricingTable:
    return pricing_table(await get_shop_settings(session))


async def update_shop_settings(
    payload: schemas.ShopSettingsPayload,
    session: AsyncSession,
) -> schemas.ShopSettingsPayload:
    """Replace shop details and the pricing table."""

    async with session.begin():
        await settings_repo.save_settings(session, fields=row_fields(payload))

    logger.info("Shop settings updated (shop=%s)", payload.shop_name)
    return payload
