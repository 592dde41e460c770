from __future__ import annotations

import argparse
import asyncio
import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from match_core.db.async_session import AsyncSessionLocal
from match_core.models.clinic import Clinic
from match_core.models.staff import ClinicMember, Profile
from match_core.models.treatment_condition import TreatmentCondition

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _seed_taxonomy() -> list[dict[str, object]]:
    return [
        {"condition": "Knee Replacement", "specialty": "Orthopedics", "keywords": ["knee", "arthroplasty", "tkr"]},
        {"condition": "Hip Replacement", "specialty": "Orthopedics", "keywords": ["hip", "thr"]},
        {"condition": "Cardiac Bypass", "specialty": "Cardiology", "keywords": ["cabg", "bypass", "heart surgery"]},
        {"condition": "Angioplasty", "specialty": "Cardiology", "keywords": ["stent", "ptca"]},
        {"condition": "IVF", "specialty": "Fertility", "keywords": ["in vitro", "infertility", "ivf"]},
        {"condition": "Cataract Surgery", "specialty": "Ophthalmology", "keywords": ["cataract", "lens"]},
        {"condition": "Type 2 Diabetes", "specialty": "Endocrinology", "keywords": ["diabetes", "dm2", "sugar"]},
    ]


def _seed_clinics() -> list[dict[str, object]]:
    return [
        {
            "name": "Apollo Heart & Joint Institute",
            "city": "Chennai",
            "country": "India",
            "is_public_listed": True,
            "treatments_offered": ["Knee Replacement", "Cardiac Bypass", "Angioplasty"],
            "specialties": ["Orthopedics", "Cardiology"],
            "success_rates": {"Knee Replacement": 96, "Cardiac Bypass": 94},
            "average_cost_by_treatment": {"Knee Replacement": 350000, "Cardiac Bypass": 450000},
            "price_range_min": 50000,
            "price_range_max": 800000,
            "patient_satisfaction": 92,
            "completion_rate": 95,
            "rating_avg": 4.6,
            "response_time_hours": 4,
            "international_support": {
                "travel_assistance": True,
                "airport_pickup": True,
                "translator_available": True,
                "visa_assistance": True,
                "remote_followup": True,
            },
            "staff": [
                ("dr-rao", "owner", "Dr. Meera Rao", ["Orthopedics"]),
                ("dr-iyer", "doctor", "Dr. Karthik Iyer", ["Orthopedics", "Sports Medicine"]),
                ("dr-nair", "doctor", "Dr. Anjali Nair", ["Cardiology"]),
            ],
        },
        {
            "name": "Sunrise Fertility Centre",
            "city": "Mumbai",
            "country": "India",
            "is_public_listed": True,
            "treatments_offered": ["IVF"],
            "specialties": ["Fertility", "Gynecology"],
            "success_rates": {"IVF": 62},
            "price_range_min": 150000,
            "price_range_max": 300000,
            "patient_satisfaction": 88,
            "rating_avg": 4.3,
            "response_time_hours": 12,
            "international_support": {"translator_available": True, "remote_followup": True},
            "staff": [
                ("dr-shah", "owner", "Dr. Priya Shah", ["Fertility"]),
            ],
        },
        {
            "name": "Clear Vision Eye Hospital",
            "city": "Bangalore",
            "country": "India",
            "is_public_listed": True,
            "treatments_offered": ["Cataract Surgery", "LASIK"],
            "specialties": ["Ophthalmology"],
            "price_range_min": 20000,
            "price_range_max": 90000,
            "completion_rate": 97,
            "rating_avg": 4.8,
            "response_time_hours": 30,
            "staff": [],
        },
        {
            "name": "Bumrungrad Orthopedic Center",
            "city": "Bangkok",
            "country": "Thailand",
            "is_public_listed": True,
            "treatments_offered": ["Hip Replacement", "Knee Replacement"],
            "specialties": ["Orthopedics"],
            "success_rates": {"Hip Replacement": 97},
            "average_cost_by_treatment": {"Knee Replacement": 600000},
            "patient_satisfaction": 94,
            "completion_rate": 93,
            "rating_avg": 4.7,
            "response_time_hours": 8,
            "international_support": {"travel_assistance": True, "airport_pickup": True, "visa_assistance": True},
            "staff": [
                ("dr-somchai", "doctor", "Dr. Somchai P.", ["Orthopedic Surgery"]),
                ("dr-lee", "doctor", "Dr. Anna Lee", ["Orthopedics"]),
                ("coord-kim", "coordinator", "Kim Tran", []),
            ],
        },
        {
            "name": "Chennai Diabetes Clinic",
            "city": "Chennai",
            "country": "India",
            "is_public_listed": False,
            "treatments_offered": ["Type 2 Diabetes"],
            "specialties": ["Endocrinology"],
            "staff": [],
        },
    ]


async def _reset(db: AsyncSession) -> None:
    for model in (ClinicMember, Profile, Clinic, TreatmentCondition):
        await db.execute(delete(model))
    await db.commit()
    logger.info("Provider directory tables cleared")


async def _seed_taxonomy_rows(db: AsyncSession) -> int:
    inserted = 0
    for row in _seed_taxonomy():
        exists = (
            await db.execute(
                select(TreatmentCondition.id).where(TreatmentCondition.condition == row["condition"]).limit(1)
            )
        ).scalar_one_or_none()
        if exists is not None:
            continue
        db.add(TreatmentCondition(**row))
        inserted += 1
    await db.commit()
    return inserted


async def _seed_clinic_rows(db: AsyncSession) -> int:
    inserted = 0
    for row in _seed_clinics():
        data = dict(row)
        staff = data.pop("staff", [])

        exists = (
            await db.execute(select(Clinic.id).where(Clinic.name == data["name"]).limit(1))
        ).scalar_one_or_none()
        if exists is not None:
            continue

        clinic = Clinic(**data)
        db.add(clinic)
        await db.flush()

        for user_id, role, full_name, specialties in staff:
            db.add(ClinicMember(clinic_id=clinic.id, user_id=user_id, role=role))
            has_profile = (
                await db.execute(select(Profile.id).where(Profile.user_id == user_id).limit(1))
            ).scalar_one_or_none()
            if has_profile is None:
                db.add(Profile(user_id=user_id, full_name=full_name, specialties=specialties))

        inserted += 1
    await db.commit()
    return inserted


async def seed_provider_directory(
    *,
    reset: bool = False,
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> None:
    async with session_factory() as db:
        try:
            if reset:
                await _reset(db)
            taxonomy_total = await _seed_taxonomy_rows(db)
            clinic_total = await _seed_clinic_rows(db)
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("Seed failed; rolled back")
            raise

    logger.info("Seed completed. taxonomy_inserted=%s clinics_inserted=%s", taxonomy_total, clinic_total)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a demonstration provider directory and condition taxonomy")
    parser.add_argument("--reset", action="store_true", help="Delete existing directory rows first")
    args = parser.parse_args()

    _configure_logging()
    asyncio.run(seed_provider_directory(reset=args.reset))


if __name__ == "__main__":
    main()
