"""
Mock travel data.

Deterministic stand-in content used when no provider key is configured and
as the fallback when a single-shot response cannot be parsed. Builders
return plain dicts in the same camelCase shape the prompts ask the model for.
"""
from dataclasses import dataclass, field
from typing import Any

from ..models.travel import TripPlanningRequest
from .prompts import trip_days


@dataclass
class MockTripContext:
    """The handful of request facts the mock builders vary on."""
    destination: str
    country: str = ""
    days: int = 7
    want_restaurants: bool = True
    want_bars: bool = False
    activities: list[str] = field(default_factory=list)
    traveler_id: str = ""

    @classmethod
    def from_request(cls, request: TripPlanningRequest) -> "MockTripContext":
        prefs = request.preferences
        interests = [a.lower() for a in prefs.activities]
        if prefs.special_activities:
            interests.append(prefs.special_activities.lower())
        return cls(
            destination=request.destination.name,
            country=request.destination.country,
            days=trip_days(prefs),
            want_restaurants=prefs.want_restaurants,
            want_bars=prefs.want_bars,
            activities=interests,
            traveler_id=request.traveler_type.id,
        )

    def wants(self, interest: str) -> bool:
        return any(interest in a for a in self.activities)


TAP_WATER = {
    "Paris": {"safe": True, "details": "Tap water in Paris meets EU standards and is safe to drink. Ask for une carafe d'eau at restaurants."},
    "Tokyo": {"safe": True, "details": "Tokyo tap water is excellent and safe to drink; public fountains make refills easy."},
    "New York": {"safe": True, "details": "New York City tap water is among the cleanest in the United States."},
}
DEFAULT_TAP_WATER = {
    "safe": False,
    "details": "Drink bottled or filtered water and avoid ice unless you know it is made from purified water.",
}

TIPPING = {
    "Paris": {
        "restaurants": "Service is included; leave 5-10% extra for good service.",
        "bars": "Round up or leave small change.",
        "taxis": "Round up to the nearest euro.",
        "hotels": "1-2 EUR per bag and per night for housekeeping.",
        "tours": "5-10 EUR per person for a full-day tour.",
        "general": "Tipping is appreciated but not obligatory in France.",
    },
    "Tokyo": {
        "restaurants": "Tipping is not customary and can be considered rude.",
        "bars": "No tipping expected.",
        "taxis": "No tipping expected.",
        "hotels": "No tipping expected.",
        "tours": "Not expected; a small gift or thank-you note is appreciated.",
        "general": "Tipping is not part of Japanese culture.",
    },
    "New York": {
        "restaurants": "15-20% of the pre-tax bill is standard.",
        "bars": "$1-2 per drink or 15-20% of the tab.",
        "taxis": "15-20% of the fare.",
        "hotels": "$2-5 per bag and per night for housekeeping.",
        "tours": "$5-10 per person for group tours.",
        "general": "Tipping is expected and is a large part of service workers' income.",
    },
}
DEFAULT_TIPPING = {
    "restaurants": "10-15% is standard for good service.",
    "bars": "Not expected, but rounding up is appreciated.",
    "taxis": "Round up the fare.",
    "hotels": "1-2 local currency units per bag.",
    "tours": "5-10% of the tour cost.",
    "general": "Tipping customs vary, so check locally.",
}

SAFETY_TIPS = [
    "Keep a copy of your passport separate from the original.",
    "Stay aware of your surroundings in crowded tourist areas.",
    "Save local emergency numbers and your embassy's contact details.",
    "Use the hotel safe and carry only what you need for the day.",
]
DESTINATION_SAFETY_TIPS = {
    "Paris": ["Watch for pickpockets around the Eiffel Tower and the Louvre.", "Ignore petition and gold-ring scams."],
    "Tokyo": ["Japan is very safe, but mind your bag on crowded trains.", "Carry cash for small shops."],
    "New York": ["Use ATMs inside banks or stores.", "Stick to well-lit streets late at night."],
}


def mock_places_to_visit(ctx: MockTripContext) -> list[dict[str, Any]]:
    places = [
        {
            "name": "Historic Downtown",
            "description": f"Wander the historic streets and architecture at the heart of {ctx.destination}.",
            "category": "historical",
            "priority": 1,
            "ticketInfo": {"required": False, "recommended": False, "bookingAdvice": "Free to explore on foot", "peakTime": [], "averageWaitTime": "No wait"},
        },
        {
            "name": "Local Market",
            "description": "Taste street food and browse local crafts at the busiest market in town.",
            "category": "culinary",
            "priority": 2,
            "ticketInfo": {"required": False, "recommended": False, "bookingAdvice": "Bring cash for purchases", "peakTime": ["weekend mornings"], "averageWaitTime": "5-10 minutes"},
        },
        {
            "name": f"{ctx.destination} Museum",
            "description": "The region's history and art under one roof.",
            "category": "museum",
            "priority": 3,
            "ticketInfo": {"required": True, "recommended": True, "bookingAdvice": "Book 1-2 weeks ahead in peak season", "peakTime": ["late morning"], "averageWaitTime": "30-60 minutes"},
        },
        {
            "name": "Scenic Viewpoint",
            "description": "Panoramic views over the city and surroundings.",
            "category": "nature",
            "priority": 4,
            "ticketInfo": {"required": False, "recommended": False, "bookingAdvice": "Check the weather before heading up", "peakTime": ["sunset"], "averageWaitTime": "No wait"},
        },
    ]
    if ctx.wants("adventure"):
        places.append({
            "name": "Adventure Park",
            "description": "Zip lines, climbing and other outdoor thrills.",
            "category": "entertainment",
            "priority": 5,
            "ticketInfo": {"required": True, "recommended": True, "bookingAdvice": "Book 3-7 days in advance", "peakTime": ["midday"], "averageWaitTime": "45-90 minutes"},
        })
    if ctx.want_bars:
        places.append({
            "name": "Entertainment District",
            "description": "Clubs, bars and live music venues in one lively area.",
            "category": "entertainment",
            "priority": 6,
            "ticketInfo": {"required": False, "recommended": True, "bookingAdvice": "VIP tables need a reservation", "peakTime": ["weekend nights"], "averageWaitTime": "15-30 minutes"},
        })
    return places


def mock_neighborhoods(ctx: MockTripContext) -> list[dict[str, Any]]:
    return [
        {
            "name": "Historic District",
            "summary": f"The old heart of {ctx.destination}, walkable and close to the main sights.",
            "vibe": "Charming and busy",
            "pros": ["Central location", "Easy walking"],
            "cons": ["Touristy", "Higher prices"],
            "bestFor": "Best for first-timers",
        },
        {
            "name": "Arts Quarter",
            "summary": "Galleries, cafes and independent shops on leafy streets.",
            "vibe": "Creative and relaxed",
            "pros": ["Local feel", "Great cafes"],
            "cons": ["Fewer big hotels"],
            "bestFor": "Best for culture lovers",
        },
        {
            "name": "Waterfront",
            "summary": "Promenades, seafood and sunset views.",
            "vibe": "Breezy and scenic",
            "pros": ["Views", "Quiet evenings"],
            "cons": ["Further from museums"],
            "bestFor": "Best for couples",
        },
    ]


def mock_hotels(ctx: MockTripContext) -> list[dict[str, Any]]:
    hotels = []
    for hood in mock_neighborhoods(ctx):
        for tier, price in (("Boutique", "$$$"), ("Guesthouse", "$$"), ("Hostel", "$")):
            hotels.append({
                "name": f"{hood['name']} {tier}",
                "neighborhood": hood["name"],
                "priceRange": price,
                "description": f"A {tier.lower()} stay in the {hood['name']}.",
                "amenities": ["Free WiFi", "Air conditioning"],
                "airbnbLink": "",
            })
    return hotels


def mock_restaurants(ctx: MockTripContext) -> list[dict[str, Any]]:
    restaurants = [
        {"name": f"{ctx.destination} Bistro", "cuisine": "Local", "priceRange": "$$", "description": "Authentic local dishes with a modern twist.", "neighborhood": "Historic District", "specialDishes": ["Chef's tasting plate"], "reservationsRecommended": "Yes"},
        {"name": "The Corner Cafe", "cuisine": "International", "priceRange": "$", "description": "Casual all-day dining.", "neighborhood": "Arts Quarter", "specialDishes": ["Brunch board"], "reservationsRecommended": "No"},
        {"name": "Harbour Table", "cuisine": "Seafood", "priceRange": "$$$", "description": "Catch of the day by the water.", "neighborhood": "Waterfront", "specialDishes": ["Grilled fish"], "reservationsRecommended": "Yes"},
    ]
    if ctx.wants("vegetarian") or ctx.wants("vegan"):
        restaurants.append({"name": "Green Leaf", "cuisine": "Vegetarian", "priceRange": "$$", "description": "Plant-based cooking with local produce.", "neighborhood": "Arts Quarter", "specialDishes": ["Seasonal bowl"], "reservationsRecommended": "No"})
    return restaurants


def mock_bars(ctx: MockTripContext) -> list[dict[str, Any]]:
    return [
        {"name": f"{ctx.destination} Craft Brewery", "type": "beer", "atmosphere": "Casual and friendly", "description": "Local brews and pub food.", "category": "Craft Beer", "neighborhood": "Historic District"},
        {"name": "Wine Cellar", "type": "wine", "atmosphere": "Intimate", "description": "A deep list with knowledgeable staff.", "category": "Wine Bar", "neighborhood": "Arts Quarter"},
        {"name": "Mixology Lounge", "type": "cocktail", "atmosphere": "Upscale and trendy", "description": "Creative cocktails with fresh ingredients.", "category": "Cocktail Lounge", "neighborhood": "Waterfront"},
        {"name": "The Local Dive", "type": "dive", "atmosphere": "Laid-back", "description": "No-frills bar popular with locals.", "category": "Dive Bar", "neighborhood": "Historic District"},
    ]


def mock_must_try_food(ctx: MockTripContext) -> dict[str, Any]:
    return {
        "items": [
            {"name": "Signature Street Snack", "description": f"The snack everyone in {ctx.destination} grew up on.", "category": "snack", "whereToFind": "Local Market", "priceRange": "$", "culturalContext": "Sold from the same stalls for generations."},
            {"name": "Regional Stew", "description": "Slow-cooked with local spices.", "category": "main", "whereToFind": "Family-run restaurants", "priceRange": "$$", "culturalContext": "A dish for family gatherings."},
            {"name": "Festival Sweet", "description": "A seasonal dessert.", "category": "dessert", "whereToFind": "Bakeries", "priceRange": "$", "culturalContext": "Traditionally shared during holidays."},
            {"name": "Local Brew", "description": "The drink locals order first.", "category": "drink", "whereToFind": "Cafes and bars", "priceRange": "$", "culturalContext": "Part of the daily social ritual."},
        ]
    }


def mock_weather() -> dict[str, Any]:
    return {
        "season": "Spring",
        "temperature": "18-25°C",
        "conditions": "Mild with occasional rain",
        "humidity": "Moderate (60-70%)",
        "dayNightTempDifference": "Drops 8-10°C at night",
        "airQuality": "Good",
        "feelsLikeWarning": "Can feel cooler in the wind",
        "recommendations": ["Pack an umbrella", "Bring a light jacket", "Layer your clothing"],
    }


def mock_transportation(ctx: MockTripContext) -> dict[str, Any]:
    airport_options = [
        {"type": "Train", "cost": "$10-15", "duration": "30 minutes", "description": "Express rail to the city center.", "notes": []},
        {"type": "Taxi", "cost": "$40-60", "duration": "45 minutes", "description": "Official taxi rank outside arrivals.", "notes": ["Avoid unofficial drivers"]},
    ]
    return {
        "publicTransport": "Metro and buses cover the city; day passes are good value.",
        "creditCardPayment": True,
        "airportTransport": {
            "airports": [
                {"name": f"{ctx.destination} International Airport", "code": "INT", "distanceToCity": "25 km", "transportOptions": airport_options},
                {"name": f"{ctx.destination} City Airport", "code": "CTY", "distanceToCity": "10 km", "transportOptions": airport_options[1:]},
            ]
        },
        "ridesharing": "Rideshare apps are widely available.",
        "taxiInfo": {"available": True, "averageCost": "$10-20 across town", "tips": ["Use metered taxis", "Agree the fare for tuk-tuks up front"]},
    }


def mock_currency(ctx: MockTripContext) -> dict[str, Any]:
    return {
        "currency": "Local currency",
        "cashNeeded": True,
        "creditCardUsage": "Cards accepted in most shops; markets are cash only.",
        "tips": ["Use bank ATMs", "Decline dynamic currency conversion"],
        "exchangeRate": {"from": "USD", "to": "LOCAL", "rate": 1.0, "lastUpdated": "2024-01-01"},
    }


def mock_activities(ctx: MockTripContext) -> list[dict[str, Any]]:
    return [
        {"name": "Cooking Class", "type": "culinary", "description": f"Learn to cook classic {ctx.destination} dishes.", "duration": "3 hours", "localSpecific": True, "experienceType": "airbnb"},
        {"name": "Guided Walking Tour", "type": "cultural", "description": "Stories and hidden corners of the old town.", "duration": "2 hours", "localSpecific": True, "experienceType": "getyourguide"},
        {"name": "Day Trip to the Countryside", "type": "nature", "description": "Villages and landscapes outside the city.", "duration": "Full day", "localSpecific": False, "experienceType": "viator"},
    ]


def mock_local_events(ctx: MockTripContext) -> list[dict[str, Any]]:
    return [
        {"name": "Weekend Night Market", "type": "market", "description": "Food stalls and live music.", "dates": "Every Saturday", "location": "Historic District"},
        {"name": f"{ctx.destination} Arts Festival", "type": "festival", "description": "Street performances and open studios.", "dates": "Seasonal", "location": "Arts Quarter"},
    ]


def mock_history(ctx: MockTripContext) -> str:
    where = f"{ctx.destination}, {ctx.country}" if ctx.country else ctx.destination
    return (
        f"{where} grew from a small trading settlement into a regional center. "
        "Successive eras left their mark on its architecture, cuisine and festivals, "
        "and the old quarter still follows the street plan laid out centuries ago."
    )


ITINERARY_SLOTS = (
    ("09:00", "Breakfast", "utensils"),
    ("10:30", "Morning sightseeing", "camera"),
    ("13:00", "Lunch", "utensils"),
    ("15:00", "Afternoon exploration", "map"),
    ("19:00", "Dinner", "wine"),
)


def mock_itinerary(ctx: MockTripContext) -> list[dict[str, Any]]:
    places = mock_places_to_visit(ctx)
    days = []
    for day in range(1, ctx.days + 1):
        place = places[(day - 1) % len(places)]
        activities = [
            {
                "time": time,
                "title": title,
                "description": f"{title} near {place['name']}.",
                "location": place["name"],
                "icon": icon,
            }
            for time, title, icon in ITINERARY_SLOTS
        ]
        days.append({"day": day, "title": f"Day {day}: {place['name']}", "activities": activities})
    return days


def mock_locations_section(ctx: MockTripContext) -> dict[str, Any]:
    section: dict[str, Any] = {
        "neighborhoods": mock_neighborhoods(ctx),
        "hotelRecommendations": mock_hotels(ctx),
    }
    if ctx.want_restaurants:
        section["restaurants"] = mock_restaurants(ctx)
    if ctx.want_bars:
        section["bars"] = mock_bars(ctx)
    return section


def mock_attractions_section(ctx: MockTripContext) -> dict[str, Any]:
    return {
        "placesToVisit": mock_places_to_visit(ctx),
        "mustTryFood": mock_must_try_food(ctx),
    }


def mock_practical_section(ctx: MockTripContext) -> dict[str, Any]:
    return {
        "weatherInfo": mock_weather(),
        "socialEtiquette": [
            "Greet shopkeepers when entering.",
            "Dress modestly at religious sites.",
            "Ask before photographing people.",
        ],
        "safetyTips": SAFETY_TIPS + DESTINATION_SAFETY_TIPS.get(ctx.destination, []),
        "transportationInfo": mock_transportation(ctx),
        "localCurrency": mock_currency(ctx),
        "tipEtiquette": TIPPING.get(ctx.destination, DEFAULT_TIPPING),
        "tapWaterSafe": TAP_WATER.get(ctx.destination, DEFAULT_TAP_WATER),
    }


def mock_cultural_section(ctx: MockTripContext) -> dict[str, Any]:
    return {
        "activities": mock_activities(ctx),
        "localEvents": mock_local_events(ctx),
        "history": mock_history(ctx),
        "itinerary": mock_itinerary(ctx),
    }


MOCK_SECTION_BUILDERS = {
    "locations": mock_locations_section,
    "attractions": mock_attractions_section,
    "practical": mock_practical_section,
    "cultural": mock_cultural_section,
}


def mock_trip_plan(ctx: MockTripContext) -> dict[str, Any]:
    """Every section merged into one plan body."""
    plan: dict[str, Any] = {}
    for build in MOCK_SECTION_BUILDERS.values():
        plan.update(build(ctx))
    plan.setdefault("restaurants", [])
    plan.setdefault("bars", [])
    return plan


def mock_manifest(ctx: MockTripContext) -> dict[str, Any]:
    return {
        "overview": {
            "duration": f"{ctx.days} days",
            "budget": "Mid-range",
            "bestFor": ["Food lovers", "Culture seekers", "First-time visitors"],
            "highlights": ["Historic Downtown", "Local Market", f"{ctx.destination} Museum"],
            "vibe": f"{ctx.destination} mixes old-town charm with a lively food scene.",
        },
        "sections": [
            {"id": "basics", "title": "Where to Stay", "description": "Neighborhoods and hotels", "estimatedItems": 12, "priority": 1, "preview": ["Historic District", "Arts Quarter", "Waterfront"]},
            {"id": "dining", "title": "Food & Drink", "description": "Restaurants and must-try dishes", "estimatedItems": 20, "priority": 2, "preview": ["Signature Street Snack", "Regional Stew", f"{ctx.destination} Bistro"]},
            {"id": "practical", "title": "Practical Info", "description": "Weather, money and getting around", "estimatedItems": 8, "priority": 3, "preview": ["Metro day passes", "Carry some cash", "Use official taxis"]},
            {"id": "cultural", "title": "Culture & Itinerary", "description": "Activities, history and day plans", "estimatedItems": ctx.days, "priority": 4, "preview": ["Cooking Class", "Guided Walking Tour", "Weekend Night Market"]},
        ],
        "quickRecommendations": {
            "topAttractions": ["Historic Downtown", f"{ctx.destination} Museum", "Scenic Viewpoint"],
            "mustTryFood": ["Signature Street Snack", "Regional Stew", "Festival Sweet"],
            "neighborhoods": ["Historic District", "Arts Quarter", "Waterfront"],
            "budgetTips": ["Eat at the market for lunch", "Buy a transit day pass", "Visit free viewpoints at sunset"],
        },
    }


MOCK_DESTINATIONS: list[dict[str, Any]] = [
    {
        "name": "Bali",
        "country": "Indonesia",
        "description": "Tropical island of beaches, rice terraces and Hindu temples.",
        "image": "https://images.pexels.com/photos/2161449/pexels-photo-2161449.jpeg?auto=compress&cs=tinysrgb&w=800",
        "highlights": ["Beautiful beaches", "Ancient temples", "Rice terraces", "Yoga retreats"],
        "bestTime": "April - October",
        "bestTimeToVisit": "April to October, the dry season, with sunny days and calm seas.",
        "estimatedCost": "$50-80/day",
        "keyActivities": ["Beach days", "Temple visits", "Rice terrace hikes", "Yoga retreats"],
        "matchReason": "Balances culture and relaxation with easy logistics.",
        "details": "Ubud is the cultural center with craft villages and yoga studios, while the south coast has surf and beach clubs. Scooters and private drivers are the usual way around.",
    },
    {
        "name": "Iceland",
        "country": "Iceland",
        "description": "Land of fire and ice with glaciers, geysers and waterfalls.",
        "image": "https://images.pexels.com/photos/1433052/pexels-photo-1433052.jpeg?auto=compress&cs=tinysrgb&w=800",
        "highlights": ["Northern Lights", "Geysers", "Waterfalls", "Blue Lagoon"],
        "bestTime": "June - August",
        "bestTimeToVisit": "June to August for midnight sun and open highland roads; winter for the aurora.",
        "estimatedCost": "$120-180/day",
        "keyActivities": ["Glacier hikes", "Geothermal baths", "Waterfall road trips", "Aurora hunting"],
        "matchReason": "Dramatic nature and adventure at every stop.",
        "details": "A rental car along the Ring Road is the classic way to see the island. Food is expensive, so supermarkets help the budget.",
    },
    {
        "name": "Tokyo",
        "country": "Japan",
        "description": "Traditional culture and modern innovation side by side.",
        "image": "https://images.pexels.com/photos/161251/senso-ji-temple-japan-kyoto-landmark-161251.jpeg?auto=compress&cs=tinysrgb&w=800",
        "highlights": ["Ancient temples", "Cherry blossoms", "Modern cities", "Amazing food"],
        "bestTime": "March - May, September - November",
        "bestTimeToVisit": "Spring for cherry blossoms and autumn for mild weather and foliage.",
        "estimatedCost": "$80-120/day",
        "keyActivities": ["Temple visits", "Food tours", "Neighborhood walks", "Day trips to Nikko"],
        "matchReason": "Endless culture and food in one of the safest big cities.",
        "details": "Each neighborhood feels like its own town, from Asakusa's temples to Shibuya's crossings. The rail network reaches everything.",
    },
    {
        "name": "Costa Rica",
        "country": "Costa Rica",
        "description": "Rainforests, volcanoes and two coastlines full of wildlife.",
        "image": "https://images.pexels.com/photos/2387873/pexels-photo-2387873.jpeg?auto=compress&cs=tinysrgb&w=800",
        "highlights": ["Rainforests", "Volcanoes", "Wildlife", "Beaches"],
        "bestTime": "December - April",
        "bestTimeToVisit": "December to April, the dry season, for trails and beaches.",
        "estimatedCost": "$70-110/day",
        "keyActivities": ["Zip-lining", "Wildlife spotting", "Volcano hikes", "Surfing"],
        "matchReason": "Outdoor adventure with a laid-back pura vida rhythm.",
        "details": "Arenal, Monteverde and the Pacific coast make a classic loop. Shuttles connect the main towns.",
    },
    {
        "name": "Greece",
        "country": "Greece",
        "description": "Ancient ruins, whitewashed islands and Mediterranean food.",
        "image": "https://images.pexels.com/photos/1285625/pexels-photo-1285625.jpeg?auto=compress&cs=tinysrgb&w=800",
        "highlights": ["Acropolis", "Island hopping", "Sunsets", "Mediterranean cuisine"],
        "bestTime": "May - October",
        "bestTimeToVisit": "May, June and September for warm seas without peak crowds.",
        "estimatedCost": "$80-130/day",
        "keyActivities": ["Ancient sites", "Island ferries", "Beach days", "Tavern dinners"],
        "matchReason": "History and relaxation in equal measure.",
        "details": "Start in Athens for the ancient sites, then ferry to the Cyclades. Book popular island hotels early in summer.",
    },
    {
        "name": "New Zealand",
        "country": "New Zealand",
        "description": "Fjords, mountains and adventure sports at the edge of the world.",
        "image": "https://images.pexels.com/photos/724963/pexels-photo-724963.jpeg?auto=compress&cs=tinysrgb&w=800",
        "highlights": ["Milford Sound", "Hiking trails", "Adventure sports", "Maori culture"],
        "bestTime": "December - February",
        "bestTimeToVisit": "December to February for long summer days on the trails.",
        "estimatedCost": "$100-150/day",
        "keyActivities": ["Great Walks", "Bungee jumping", "Fjord cruises", "Maori cultural visits"],
        "matchReason": "Big landscapes and adrenaline for active travelers.",
        "details": "Campervans are the favourite way to cover both islands. Queenstown is the adventure capital.",
    },
]


def mock_destination_summary() -> str:
    return (
        "Based on your traveler type, these destinations balance cultural immersion "
        "and natural beauty from our curated collection."
    )
