"""Create database schema and seed default settings and a starter garage."""
from __future__ import annotations

import asyncio
from datetime import date

from sqlalchemy import select

from ebike_rental.db.session import SessionLocal, engine
from ebike_rental.models import Bike, FixedCost
from ebike_rental.models.base import Base
from ebike_rental.models.enums import BikeSize, BikeType, CostCategory, CostFrequency, Suspension
from ebike_rental.repositories import shop_settings as settings_repo
from ebike_rental.services.shop_settings import default_payload, row_fields

BIKES = [
	{
		"id": "bike-adult-m-full-1",
		"name": "Adult M Full #1",
		"brand": "Haibike",
		"model": "AllMtn 3",
		"type": BikeType.ADULT,
		"size": BikeSize.M,
		"suspension": Suspension.FULL,
		"has_trailer_hook": True,
		"min_height": 165,
		"max_height": 180,
		"purchase_date": date(2024, 3, 1),
		"purchase_price": 3200.0,
	},
	{
		"id": "bike-adult-m-full-2",
		"name": "Adult M Full #2",
		"brand": "Haibike",
		"model": "AllMtn 3",
		"type": BikeType.ADULT,
		"size": BikeSize.M,
		"suspension": Suspension.FULL,
		"has_trailer_hook": False,
		"min_height": 165,
		"max_height": 180,
		"purchase_date": date(2024, 3, 1),
		"purchase_price": 3200.0,
	},
	{
		"id": "bike-adult-l-front-1",
		"name": "Adult L Front #1",
		"brand": "Cube",
		"model": "Reaction Hybrid",
		"type": BikeType.ADULT,
		"size": BikeSize.L,
		"suspension": Suspension.FRONT_ONLY,
		"has_trailer_hook": False,
		"min_height": 178,
		"max_height": 192,
		"purchase_date": date(2024, 4, 15),
		"purchase_price": 2600.0,
	},
	{
		"id": "bike-child-s-front-1",
		"name": "Child S Front #1",
		"brand": "Cube",
		"model": "Acid 240 Hybrid",
		"type": BikeType.CHILD,
		"size": BikeSize.S,
		"suspension": Suspension.FRONT_ONLY,
		"has_trailer_hook": False,
		"min_height": 125,
		"max_height": 145,
		"purchase_date": date(2024, 5, 10),
		"purchase_price": 1900.0,
	},
	{
		"id": "trailer-child-1",
		"name": "Child Trailer #1",
		"brand": "Thule",
		"model": "Chariot Cross",
		"type": BikeType.CHILD_TRAILER,
		"purchase_date": date(2024, 5, 10),
		"purchase_price": 900.0,
	},
]

FIXED_COSTS = [
	{
		"name": "Shop rent",
		"amount": 1200.0,
		"category": CostCategory.RENT,
		"frequency": CostFrequency.MONTHLY,
		"start_date": date(2024, 1, 1),
	},
	{
		"name": "Fleet insurance",
		"amount": 1800.0,
		"category": CostCategory.INSURANCE,
		"frequency": CostFrequency.YEARLY,
		"start_date": date(2024, 1, 1),
	},
]


async def create_schema() -> None:
	"""Create the database schema if it does not already exist."""

	async with engine.begin() as conn:
		await conn.run_sync(Base.metadata.create_all)


async def seed_settings() -> None:
	"""Store the configured defaults unless the shop already saved its own."""

	async with SessionLocal() as session:
		async with session.begin():
			if await settings_repo.get_settings(session) is None:
				await settings_repo.save_settings(session, fields=row_fields(default_payload()))


async def seed_garage() -> None:
	"""Insert or update the starter bikes and fixed costs."""

	async with SessionLocal() as session:
		async with session.begin():
			for bike_data in BIKES:
				bike = await session.get(Bike, bike_data["id"])
				if bike is None:
					session.add(Bike(**bike_data))
				else:
					for name, value in bike_data.items():
						setattr(bike, name, value)
					session.add(bike)

			if (await session.execute(select(FixedCost.id).limit(1))).first() is None:
				for cost_data in FIXED_COSTS:
					session.add(FixedCost(**cost_data))


async def main() -> None:
	await create_schema()
	await seed_settings()
	await seed_garage()
	await engine.dispose()
	print("Database schema ensured and starter garage seeded.")


if __name__ == "__main__":
	asyncio.run(main())
