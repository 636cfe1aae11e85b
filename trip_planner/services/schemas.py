"""
Strict JSON schemas for structured model output.

OpenAI strict mode requires every property to be listed as required and
``additionalProperties`` to be false on every object, so schemas are built
through ``_object`` rather than written out by hand.
"""
from typing import Any

STRING = {"type": "string"}
NUMBER = {"type": "number"}
BOOLEAN = {"type": "boolean"}


def _array(items: dict[str, Any]) -> dict[str, Any]:
    return {"type": "array", "items": items}


def _object(**properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


STRINGS = _array(STRING)

LOCATIONS_SCHEMA = _object(
    neighborhoods=_array(_object(name=STRING, summary=STRING, vibe=STRING, pros=STRINGS, cons=STRINGS, bestFor=STRING)),
    hotelRecommendations=_array(_object(
        name=STRING, neighborhood=STRING, priceRange=STRING, description=STRING, amenities=STRINGS, airbnbLink=STRING,
    )),
    restaurants=_array(_object(
        name=STRING, cuisine=STRING, priceRange=STRING, description=STRING, neighborhood=STRING,
        specialDishes=STRINGS, reservationsRecommended=STRING,
    )),
    bars=_array(_object(
        name=STRING, type=STRING, atmosphere=STRING, description=STRING, category=STRING, neighborhood=STRING,
    )),
)

ATTRACTIONS_SCHEMA = _object(
    placesToVisit=_array(_object(
        name=STRING,
        description=STRING,
        category=STRING,
        priority=NUMBER,
        ticketInfo=_object(
            required=BOOLEAN, recommended=BOOLEAN, bookingAdvice=STRING, peakTime=STRINGS, averageWaitTime=STRING,
        ),
    )),
    mustTryFood=_object(items=_array(_object(
        name=STRING,
        description=STRING,
        category={"type": "string", "enum": ["main", "dessert", "drink", "snack"]},
        whereToFind=STRING,
        priceRange=STRING,
        culturalContext=STRING,
    ))),
)

PRACTICAL_SCHEMA = _object(
    weatherInfo=_object(
        season=STRING, temperature=STRING, conditions=STRING, humidity=STRING, dayNightTempDifference=STRING,
        airQuality=STRING, feelsLikeWarning=STRING, recommendations=STRINGS,
    ),
    socialEtiquette=STRINGS,
    safetyTips=STRINGS,
    transportationInfo=_object(
        publicTransport=STRING,
        creditCardPayment=BOOLEAN,
        airportTransport=_object(airports=_array(_object(
            name=STRING,
            code=STRING,
            distanceToCity=STRING,
            transportOptions=_array(_object(type=STRING, cost=STRING, duration=STRING, description=STRING, notes=STRINGS)),
        ))),
        ridesharing=STRING,
        taxiInfo=_object(available=BOOLEAN, averageCost=STRING, tips=STRINGS),
    ),
    localCurrency=_object(
        currency=STRING,
        cashNeeded=BOOLEAN,
        creditCardUsage=STRING,
        tips=STRINGS,
        exchangeRate=_object(**{"from": STRING, "to": STRING, "rate": NUMBER, "lastUpdated": STRING}),
    ),
    tipEtiquette=_object(restaurants=STRING, bars=STRING, taxis=STRING, hotels=STRING, tours=STRING, general=STRING),
    tapWaterSafe=_object(safe=BOOLEAN, details=STRING),
)

CULTURAL_SCHEMA = _object(
    activities=_array(_object(
        name=STRING,
        type=STRING,
        description=STRING,
        duration=STRING,
        localSpecific=BOOLEAN,
        experienceType={"type": "string", "enum": ["airbnb", "getyourguide", "viator", "other"]},
    )),
    localEvents=_array(_object(name=STRING, type=STRING, description=STRING, dates=STRING, location=STRING)),
    history=STRING,
    itinerary=_array(_object(
        day=NUMBER,
        title=STRING,
        activities=_array(_object(time=STRING, title=STRING, description=STRING, location=STRING, icon=STRING)),
    )),
)

CAPITALIZED_LINE = {"type": "string", "pattern": "^[A-Z][^\n\r]*$"}

DESTINATION_SCHEMA = _object(
    destinations=_array(_object(
        name=STRING,
        country=STRING,
        description=STRING,
        bestTimeToVisit=STRING,
        keyActivities=_array(CAPITALIZED_LINE),
        matchReason=STRING,
        estimatedCost=STRING,
        highlights=_array(_object(name=CAPITALIZED_LINE, description=STRING)),
        details=STRING,
    )),
    summary=STRING,
)

SECTION_SCHEMAS = {
    "locations": LOCATIONS_SCHEMA,
    "attractions": ATTRACTIONS_SCHEMA,
    "practical": PRACTICAL_SCHEMA,
    "cultural": CULTURAL_SCHEMA,
}
