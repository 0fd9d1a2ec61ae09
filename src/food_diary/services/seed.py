"""Demo data used when the diary starts empty."""

import random
from dataclasses import replace
from datetime import date, datetime, time, timedelta

from food_diary.domain.hydration import TimeSlot
from food_diary.domain.meals import Meal
from food_diary.services.hydration import default_time_slots
from food_diary.services.meals import new_meal

MAIN_MEAL_TYPES = ("มื้อเช้า", "มื้อเที่ยง", "มื้อเย็น")
EXAMPLE_FOODS = (
    ("สลัดอกไก่", "https://picsum.photos/id/493/200/200", 350),
    ("แซลมอนย่าง", "https://picsum.photos/id/429/200/200", 550),
    ("สมูทตี้ผลไม้", "https://picsum.photos/id/1080/200/200", 180),
    ("กะเพราหมูสับ", "https://picsum.photos/id/292/200/200", 600),
    ("โยเกิร์ต", "https://picsum.photos/id/225/200/200", 150),
)
HISTORY_DAYS = 9
SEED_WATER_ML = {"morning": 800, "afternoon": 450, "evening": 0}


def seed_meals(today: date, rng: random.Random) -> list[Meal]:
    """Return demo meals, oldest first, ready to be added to a store."""
    meals = []
    for days_ago in range(HISTORY_DAYS, 0, -1):
        logged_at = datetime.combine(today - timedelta(days=days_ago), time(12))
        for _ in range(rng.randint(2, 3)):
            name, image, calories = rng.choice(EXAMPLE_FOODS)
            meals.append(
                new_meal(
                    meal_type=rng.choice(MAIN_MEAL_TYPES),
                    food_name=name,
                    calories=calories + rng.randrange(50),
                    image=image,
                    timestamp=logged_at,
                )
            )
    now = datetime.combine(today, time(12))
    meals.append(
        new_meal(
            meal_type="มื้อเที่ยง",
            food_name="ขนมปังหน้าอวอคาโด",
            calories=450,
            image="https://picsum.photos/id/429/200/200",
            timestamp=now,
            tags=("ไขมันดี", "มังสวิรัติ"),
        )
    )
    meals.append(
        new_meal(
            meal_type="มื้อเช้า",
            food_name="ข้าวโอ๊ตและเบอร์รี่",
            calories=320,
            image="https://picsum.photos/id/493/200/200",
            timestamp=now,
            tags=("โปรตีนสูง", "ไฟเบอร์สูง"),
        )
    )
    return meals


def seed_time_slots() -> list[TimeSlot]:
    """Return the default slots with the demo intake already recorded."""
    return [
        replace(slot, current=SEED_WATER_ML[slot.id.value])
        for slot in default_time_slots()
    ]
