"""Raw snapshot builders shared by the test modules."""


def cheapest(day: str, price, airline: str = "Delta", stops: int | None = 1) -> dict:
    return {"date": day, "cheapest": {"price": price, "airline": airline, "stops": stops}}


def both(day: str, price, nonstop_price, airline: str = "Delta", nonstop_airline: str = "Southwest",
         stops: int | None = 1) -> dict:
    return {
        "date": day,
        "cheapest": {"price": price, "airline": airline, "stops": stops},
        "nonstop": {"price": nonstop_price, "airline": nonstop_airline},
    }
