# AGRICONNECT/ORDERS/fees.py
from dataclasses import dataclass
from typing import Iterable, Mapping

# kg per unit of quantity
UNIT_WEIGHTS = {
    "kg": 1.0,
    "liter(1L)": 1.0,
    "dozen (Egg)": 1.2,
    "box(10-15kg)": 12.5,
}
DEFAULT_UNIT_WEIGHT = 0.5

FEE_PER_DISTANCE_UNIT = 2

# (max weight in kg, fee); brackets are inclusive and ascending
WEIGHT_FEE_BRACKETS = (
    (5, 10),
    (10, 20),
    (20, 30),
)
HEAVY_WEIGHT_FEE = 50


@dataclass(frozen=True)
class FeeBreakdown:
    subtotal: float
    total_weight_kg: float
    distance_fee: float
    weight_fee: float
    delivery_fee: float
    grand_total: float


def item_weight(unit: str, quantity: float) -> float:
    return quantity * UNIT_WEIGHTS.get(unit, DEFAULT_UNIT_WEIGHT)


def weight_fee(total_weight_kg: float) -> float:
    for max_kg, fee in WEIGHT_FEE_BRACKETS:
        if total_weight_kg <= max_kg:
            return fee
    return HEAVY_WEIGHT_FEE


def calculate_fees(items: Iterable[Mapping], distance: float) -> FeeBreakdown:
    """
    Derive subtotal, weight and delivery fee for an order.
    Each item needs `price` and `quantity`; `unit` picks the weight factor.
    """
    subtotal = 0
    total_weight = 0
    for item in items:
        quantity = item["quantity"]
        subtotal += item["price"] * quantity
        total_weight += item_weight(item.get("unit"), quantity)

    distance_fee = distance * FEE_PER_DISTANCE_UNIT
    w_fee = weight_fee(total_weight)
    delivery_fee = distance_fee + w_fee

    return FeeBreakdown(
        subtotal=subtotal,
        total_weight_kg=round(total_weight, 2),
        distance_fee=distance_fee,
        weight_fee=w_fee,
        delivery_fee=delivery_fee,
        grand_total=subtotal + delivery_fee,
    )
