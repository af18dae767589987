"""Render domain objects as camelCase JSON documents."""

from datetime import date, datetime
from uuid import UUID

from lankanutri.domain.catalog import Order, Product
from lankanutri.domain.diet import DietPlanRecord
from lankanutri.domain.foods import TraditionalFood
from lankanutri.domain.localization import is_translated_language
from lankanutri.domain.meals import MealLog
from lankanutri.domain.plates import Plate
from lankanutri.domain.programs import DietProgram
from lankanutri.domain.tips import DailyTip
from lankanutri.domain.users import AuthSession, UserProfile
from lankanutri.services.meal_logs import MealStats


def _id(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


def _timestamp(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None


def food_to_dict(food: TraditionalFood, language: str | None = None) -> dict:
    document = {
        "id": _id(food.id),
        "name": food.name.as_dict(),
        "description": food.description.as_dict(),
        "type": food.type,
        "category": food.category,
        "nutrition": food.nutrition.as_dict(),
        "servingSize": food.serving_size.as_dict(),
        "traditionalUses": food.traditional_uses,
        "healthBenefits": food.health_benefits,
        "preparationMethods": food.preparation_methods,
        "image": food.image,
        "isCommon": food.is_common,
        "isAffordable": food.is_affordable,
        "createdAt": _timestamp(food.created_at),
    }
    if is_translated_language(language):
        document["displayName"] = food.name.resolve(language)
        document["displayDescription"] = food.description.resolve(language)
    return document


def plate_to_dict(plate: Plate, language: str | None = None) -> dict:
    document = {
        "id": _id(plate.id),
        "name": plate.name.as_dict(),
        "description": plate.description.as_dict(),
        "goal": plate.goal.value,
        "items": [
            {
                "foodId": _id(item.food_id),
                "name": item.name,
                "portion": item.portion,
                "nutrition": item.nutrition.as_dict(),
            }
            for item in plate.items
        ],
        "totalNutrition": plate.total_nutrition.as_dict(),
        "substitutions": [
            {"original": s.original, "substitute": s.substitute, "reason": s.reason}
            for s in plate.substitutions
        ],
        "isBusyLifeFriendly": plate.is_busy_life_friendly,
        "prepTime": plate.prep_time,
        "image": plate.image,
        "createdAt": _timestamp(plate.created_at),
    }
    if is_translated_language(language):
        document["displayName"] = plate.name.resolve(language)
        document["displayDescription"] = plate.description.resolve(language)
    return document


def tip_to_dict(tip: DailyTip, language: str | None = None) -> dict:
    document = {
        "id": _id(tip.id),
        "tip": tip.tip.as_dict(),
        "category": tip.category,
        "date": _timestamp(tip.date),
        "difficulty": tip.difficulty,
        "culturalRelevance": tip.cultural_relevance,
        "relatedFoods": tip.related_foods,
        "isActive": tip.is_active,
    }
    if is_translated_language(language):
        document["displayTip"] = tip.tip.resolve(language)
    return document


def program_to_dict(program: DietProgram) -> dict:
    return {
        "id": _id(program.id),
        "name": program.name,
        "category": program.category,
        "description": program.description,
        "durationDays": program.duration_days,
        "dailyCalories": program.daily_calories,
        "meals": program.meals,
        "image": program.image,
        "isActive": program.is_active,
        "createdAt": _timestamp(program.created_at),
    }


def product_to_dict(product: Product) -> dict:
    return {
        "id": _id(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "category": product.category,
        "stock": product.stock,
        "image": product.image,
        "isAvailable": product.is_available,
        "nutrition": product.nutrition.as_dict(),
        "createdAt": _timestamp(product.created_at),
    }


def order_to_dict(order: Order) -> dict:
    address = order.shipping_address
    return {
        "id": _id(order.id),
        "user": _id(order.user_id),
        "orderItems": [
            {
                "product": _id(item.product_id),
                "name": item.name,
                "quantity": item.quantity,
                "price": item.price,
                "image": item.image,
            }
            for item in order.items
        ],
        "shippingAddress": {
            "address": address.address,
            "city": address.city,
            "postalCode": address.postal_code,
            "country": address.country,
        },
        "paymentMethod": order.payment_method,
        "itemsPrice": order.items_price,
        "shippingPrice": order.shipping_price,
        "totalPrice": order.total_price,
        "isPaid": order.is_paid,
        "paidAt": _timestamp(order.paid_at),
        "isDelivered": order.is_delivered,
        "deliveredAt": _timestamp(order.delivered_at),
        "createdAt": _timestamp(order.created_at),
    }


def user_to_dict(user: UserProfile) -> dict:
    return {
        "id": _id(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "phone": user.phone,
        "address": user.address,
        "avatar": user.avatar,
        "createdAt": _timestamp(user.created_at),
    }


def session_to_dict(session: AuthSession) -> dict:
    return {**user_to_dict(session.user), "token": session.access_token}


def diet_plan_to_dict(record: DietPlanRecord) -> dict:
    return {
        "id": _id(record.id),
        "user": _id(record.user_id),
        "input": {
            "weight": record.profile.weight,
            "height": record.profile.height,
            "age": record.profile.age,
            "bloodPressure": record.profile.blood_pressure,
            "sugar": record.profile.sugar,
            "bodyType": record.profile.body_type,
            "activityLevel": record.profile.activity_level,
        },
        "planText": record.plan_text,
        "metadata": record.metadata,
        "createdAt": _timestamp(record.created_at),
    }


def meal_log_to_dict(meal_log: MealLog) -> dict:
    return {
        "id": _id(meal_log.id),
        "user": _id(meal_log.user_id),
        "mealType": meal_log.meal_type,
        "image": meal_log.image,
        "recognizedItems": [
            {
                "name": item.name,
                "confidence": item.confidence,
                "estimatedPortion": item.estimated_portion,
            }
            for item in meal_log.recognized_items
        ],
        "manualItems": [
            {
                "foodId": _id(item.food_id),
                "name": item.name,
                "portion": item.portion,
                "calories": item.calories,
            }
            for item in meal_log.manual_items
        ],
        "totalNutrition": meal_log.total_nutrition.as_dict(),
        "notes": meal_log.notes,
        "loggedAt": _timestamp(meal_log.logged_at),
    }


def meal_stats_to_dict(stats: MealStats) -> dict:
    return {
        "days": stats.days,
        "daily": [
            {
                "date": _timestamp(day.day),
                "meals": day.meals,
                "nutrition": day.nutrition.as_dict(),
            }
            for day in stats.daily
        ],
        "mealTypeCounts": stats.meal_type_counts,
        "totalNutrition": stats.total.as_dict(),
    }
