TOTAL_TOLERANCE = 0.01


def calculate_rental_total(price_per_day: float, days: int, discount: float = 0.0,
                           driver: bool = False, driver_fee_per_day: float = 0.0) -> float:
    """
    Calculates the price of a rental.

    :param price_per_day: car price for one day
    :param days: number of rented days
    :param discount: discount in percent (e.g. 10.0 for 10%)
    :param driver: whether a driver is booked with the car
    :param driver_fee_per_day: driver surcharge for one day
    :return: total for the whole period, discount and driver included
    """
    if days <= 0:
        raise ValueError("Rental must last at least one day")

    total = price_per_day * days
    if discount:
        total = total * (1 - discount / 100)
    if driver:
        total += driver_fee_per_day * days

    return round(total, 2)


def total_matches(claimed: float, expected: float) -> bool:
    return abs(claimed - expected) <= TOTAL_TOLERANCE
