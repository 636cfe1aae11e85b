"""
Prompt builders for the trip planner.

Every function here is pure: the same request always produces the same
prompt text. Each section prompt embeds a literal JSON template the model
is asked to fill in.
"""
import math
import re
from typing import Optional

from ..models.travel import DestinationRequest, TripPlanningRequest, TripPreferences


DEFAULT_TRIP_DAYS = 7

JSON_ONLY_FOOTER = "START YOUR RESPONSE WITH { AND END WITH }. NO OTHER TEXT."

# Optional persona-specific lines, in display order
PERSONA_PREFERENCE_LABELS = (
    ("activity_level", "Activity Level"),
    ("risk_tolerance", "Risk Tolerance"),
    ("spontaneity", "Spontaneity"),
    ("schedule_detail", "Schedule Detail"),
    ("booking_preference", "Booking Preference"),
    ("backup_plans", "Backup Plans"),
    ("luxury_level", "Luxury Level"),
    ("service_level", "Service Level"),
    ("exclusivity", "Exclusivity"),
    ("relaxation_style", "Relaxation Style"),
    ("pace_preference", "Pace Preference"),
    ("stress_level", "Stress Level"),
)

SECTION_GUIDANCE = """
Focus on creating authentic experiences that match their travel style while being comprehensive and practical. Consider their budget constraints, time limitations, and personal preferences throughout all recommendations.

CRITICAL: Your response MUST be ONLY a valid JSON object. Do not include any text before or after the JSON.

Use this exact structure, MAKE SURE there is a comma after each field:
"""


def trip_days(preferences: TripPreferences) -> int:
    """Leading integer of the duration string, or 7 when there is none."""
    match = re.match(r"\s*(\d+)", preferences.duration or "")
    if match and int(match.group(1)) > 0:
        return int(match.group(1))
    return DEFAULT_TRIP_DAYS


def restaurant_count(preferences: TripPreferences) -> int:
    return math.ceil(trip_days(preferences) * 4)


def bar_count(preferences: TripPreferences) -> int:
    return math.ceil(trip_days(preferences) * 2)


def places_count(preferences: TripPreferences) -> int:
    multiplier = {"high": 4, "low": 2}.get(preferences.activity_level or "", 3)
    return math.ceil(trip_days(preferences) * multiplier)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_trip_context(request: TripPlanningRequest) -> str:
    """Destination, traveler profile and preference lines shared by all section prompts."""
    destination = request.destination
    traveler = request.traveler_type
    prefs = request.preferences

    lines = [
        "You are an expert travel planner AI. Create a detailed, personalized travel plan for the following traveler:",
        "",
        f"DESTINATION: {destination.name}, {destination.country}",
        f"Destination Description: {destination.description}",
        f"Best Time to Visit: {destination.best_time_label}",
        "",
        "TRAVELER PROFILE:",
        f"Type: {traveler.name} - {traveler.description}",
        "",
        "TRIP PREFERENCES:",
        f"- Time of Year: {prefs.time_of_year}",
        f"- Duration: {prefs.duration}",
        f"- Budget: {prefs.budget}",
        f"- Accommodation: {prefs.accommodation}",
        f"- Transportation: {prefs.transportation}",
        f"- Wants Restaurant Recommendations: {_yes_no(prefs.want_restaurants)}",
        f"- Wants Bar/Nightlife Recommendations: {_yes_no(prefs.want_bars)}",
        f"- Trip Type: {prefs.trip_type}",
        f"- Special Activities Requested: {prefs.special_activities}",
    ]
    for field, label in PERSONA_PREFERENCE_LABELS:
        value = getattr(prefs, field)
        if value:
            lines.append(f"- {label}: {value}")
    return "\n".join(lines) + "\n"


def _locations_template(prefs: TripPreferences) -> str:
    fields = [
        '  "neighborhoods": [{"name": "string", "summary": "string", "vibe": "string", "pros": ["string"], "cons": ["string"], "bestFor": "string"}]',
        '  "hotelRecommendations": [{"name": "string", "neighborhood": "string", "priceRange": "string", "description": "string", "amenities": ["string"], "airbnbLink": "string"}]',
    ]
    if prefs.want_restaurants:
        fields.append(
            '  "restaurants": [{"name": "string", "cuisine": "string", "priceRange": "string", "description": "string", "neighborhood": "string", "specialDishes": ["string"], "reservationsRecommended": "string"}]'
        )
    if prefs.want_bars:
        fields.append(
            '  "bars": [{"name": "string", "type": "string", "atmosphere": "string", "description": "string", "category": "string", "neighborhood": "string"}]'
        )
    return "{\n" + ",\n".join(fields) + "\n}"


FOOD_TEMPLATE = """{
  "placesToVisit": [{"name": "string", "description": "string", "category": "string", "priority": number, "ticketInfo": {"required": boolean, "recommended": boolean, "bookingAdvice": "string", "peakTime": ["string"], "averageWaitTime": "string"}}],
  "mustTryFood": {"items": [{"name": "string", "description": "string", "category": "main|dessert|drink|snack", "whereToFind": "string", "priceRange": "string", "culturalContext": "string"}]}
}"""

PRACTICAL_TEMPLATE = """{
  "weatherInfo": {"season": "string", "temperature": "string", "conditions": "string", "humidity": "string", "dayNightTempDifference": "string", "airQuality": "string", "feelsLikeWarning": "string", "recommendations": ["string"]},
  "socialEtiquette": ["string"],
  "safetyTips": ["string"],
  "transportationInfo": {"publicTransport": "string", "creditCardPayment": boolean, "airportTransport": {"airports": [{"name": "string", "code": "string", "distanceToCity": "string", "transportOptions": [{"type": "string", "cost": "string", "duration": "string", "description": "string", "notes": ["string"]}]}]}, "ridesharing": "string", "taxiInfo": {"available": boolean, "averageCost": "string", "tips": ["string"]}},
  "localCurrency": {"currency": "string", "cashNeeded": boolean, "creditCardUsage": "string", "tips": ["string"], "exchangeRate": {"from": "USD", "to": "string", "rate": number, "lastUpdated": "string"}},
  "tipEtiquette": {"restaurants": "string", "bars": "string", "taxis": "string", "hotels": "string", "tours": "string", "general": "string"},
  "tapWaterSafe": {"safe": boolean, "details": "string"}
}"""

CULTURAL_TEMPLATE = """{
  "activities": [{"name": "string", "type": "string", "description": "string", "duration": "string", "localSpecific": boolean, "experienceType": "airbnb|getyourguide|viator|other"}],
  "localEvents": [{"name": "string", "type": "string", "description": "string", "dates": "string", "location": "string"}],
  "history": "string",
  "itinerary": [{"day": number, "title": "string", "activities": [{"time": "string", "title": "string", "description": "string", "location": "string", "icon": "string"}]}]
}"""


def _locations_instructions(prefs: TripPreferences) -> str:
    return f"""
1. NEIGHBORHOOD BREAKDOWNS (3-5 MOST POPULAR NEIGHBORHOODS)
   - Summary of 3-5 most popular neighborhoods with their unique vibes
   - Pros and cons of each neighborhood for travelers: accommodation and food options, proximity to major attractions, touristy vs local, safety, accessibility
   - One-liner suggestion on best for, e.g. "Best for first-timers" or "Best for families"

2. HOTEL RECOMMENDATIONS
   - For each neighborhood listed above, provide EXACTLY THREE (3) distinct accommodation options
   - Each option must match the accommodation type ({prefs.accommodation}) and budget ({prefs.budget})
   - Include name, amenities, price range and a detailed description
   - Include a link to the Airbnb listing when applicable, otherwise use an empty string ""

3. RESTAURANT RECOMMENDATIONS
   - Adjust number based on trip length and activity level: {restaurant_count(prefs)} recommendations
   - Vary by cuisine type and neighborhood and include specific dishes to try
   - Include if reservations are recommended / required - "Yes" or "No"

4. BAR/NIGHTLIFE RECOMMENDATIONS
   - Adjust number based on trip length and activity level: {bar_count(prefs)} recommendations
   - Only return data if "Wants Bar/Nightlife Recommendations" is "Yes"
   - Categorize by type: beer bars, wine bars, cocktail lounges, dive bars
"""


def _food_instructions(prefs: TripPreferences) -> str:
    return f"""
1. PLACES TO VISIT
   - Adjust number of attractions based on trip length and activity level: {places_count(prefs)} recommendations
   - Main attractions categorized by type (cultural, historical, natural, entertainment, etc.)
   - Include a priority ranking for each attraction
   - For each place include ticket booking information: required or recommended, booking advice, peak times during the day, average wait time

2. MUST-TRY LOCAL FOOD AND DRINK
   - The most quintessential main dishes, desserts, drinks and snacks
   - Where to find each item and price ranges when relevant
   - Cultural context about why these foods matter locally
"""


PRACTICAL_INSTRUCTIONS = """
1. DETAILED WEATHER INFORMATION
   - Humidity, day vs night temperature difference, air quality, "feels like" warnings
   - Specific clothing and preparation recommendations

2. SOCIAL ETIQUETTE
   - Cultural norms, dress codes, and common tourist mistakes to avoid

3. LOCAL SAFETY TIPS
   - Precautions, common scams, emergency contacts, safe vs unsafe areas and times

4. COMPREHENSIVE TRANSPORTATION INFO
   - Public transport overview and whether credit cards can be tapped directly
   - ALL major airports serving the destination with distance to city center and every transport option (cost, duration, notes; use [] when there are no notes)
   - Rideshare/taxi availability and typical costs, including local options such as motorbikes or tuk-tuks

5. CURRENCY AND PAYMENT INFORMATION
   - Local currency and current exchange rate from USD, cash vs card, ATM advice

6. TIPPING ETIQUETTE
   - Guidelines for restaurants, bars, taxis, hotels and tour guides

7. TAP WATER SAFETY
   - Is tap water safe to drink?
"""


def _cultural_instructions(prefs: TripPreferences) -> str:
    return f"""
1. LOCAL ACTIVITIES AND EXPERIENCES
   - Destination-specific experiences (cooking classes, cultural workshops, unique tours)
   - Specify the experience provider type for each activity

2. LOCAL EVENTS DURING TRAVEL TIME
   - Festivals, markets, or special events happening during their visit and how to attend

3. EXTENDED HISTORICAL CONTEXT (AROUND 300 WORDS)
   - Major historical periods, key sites, and how history shapes the destination today

4. DETAILED DAY-BY-DAY ITINERARY
   - Incorporate all above elements into a practical daily schedule
   - Adjust daily activities based on preferred activity level: {prefs.activity_level or "medium"}
   - High activity: 4-6 activities per day, medium: 3-4, low: 2-3
   - Consider travel time between locations
"""


def _section_prompt(request: TripPlanningRequest, instructions: str, template: str, closing: str = "") -> str:
    return (
        build_trip_context(request)
        + "\nPlease create a comprehensive travel plan that includes ALL of the following detailed sections:\n"
        + instructions
        + SECTION_GUIDANCE
        + "\n"
        + template
        + "\n\n"
        + closing
        + JSON_ONLY_FOOTER
    )


def generate_locations_prompt(request: TripPlanningRequest) -> str:
    """Neighborhoods, hotels and (optionally) restaurants and bars."""
    prefs = request.preferences
    return _section_prompt(request, _locations_instructions(prefs), _locations_template(prefs))


def generate_food_prompt(request: TripPlanningRequest) -> str:
    """Places to visit plus must-try local food and drink."""
    prefs = request.preferences
    return _section_prompt(request, _food_instructions(prefs), FOOD_TEMPLATE)


def generate_practical_prompt(request: TripPlanningRequest) -> str:
    """Weather, etiquette, safety, transport, money and tap water."""
    return _section_prompt(request, PRACTICAL_INSTRUCTIONS, PRACTICAL_TEMPLATE)


def generate_cultural_prompt(request: TripPlanningRequest) -> str:
    """Activities, events, history and the day-by-day itinerary."""
    prefs = request.preferences
    closing = f"Ensure itinerary has at least {trip_days(prefs)} days. "
    return _section_prompt(request, _cultural_instructions(prefs), CULTURAL_TEMPLATE, closing)


def generate_trip_planning_prompt(request: TripPlanningRequest) -> str:
    """Single-shot prompt asking for every section in one JSON object."""
    prefs = request.preferences
    instructions = (
        _locations_instructions(prefs)
        + _food_instructions(prefs)
        + PRACTICAL_INSTRUCTIONS
        + _cultural_instructions(prefs)
    )
    template = "\n".join(
        [
            "{",
            _inner(_locations_template(prefs)) + ",",
            _inner(FOOD_TEMPLATE) + ",",
            _inner(PRACTICAL_TEMPLATE) + ",",
            _inner(CULTURAL_TEMPLATE),
            "}",
        ]
    )
    closing = f"Ensure itinerary has at least {trip_days(prefs)} days. "
    return _section_prompt(request, instructions, template, closing)


def _inner(template: str) -> str:
    """Body of a ``{...}`` template without its outer braces."""
    return template.strip()[1:-1].strip("\n")


def generate_manifest_prompt(request: TripPlanningRequest) -> str:
    """Short, low-token prompt for the plan preview."""
    destination = request.destination
    traveler = request.traveler_type
    prefs = request.preferences
    return f"""You are a travel planning expert. Generate a FAST, high-level travel plan manifest for:

DESTINATION: {destination.name}, {destination.country}
TRAVELER: {traveler.name} - {traveler.description}
DURATION: {prefs.duration}
BUDGET: {prefs.budget}
TIME OF YEAR: {prefs.time_of_year}
TRIP TYPE: {prefs.trip_type}

Create a JSON manifest with:
1. Overview (destination vibe, best highlights, what it's perfect for)
2. Quick preview of top 3-4 items for each section
3. Essential recommendations visitors need immediately

CRITICAL: Keep response under 1500 tokens for speed. Focus on the most important/popular items only.

Return ONLY valid JSON matching this structure:

{{
  "overview": {{
    "duration": "string",
    "budget": "string",
    "bestFor": ["string"],
    "highlights": ["string"],
    "vibe": "string"
  }},
  "sections": [
    {{
      "id": "basics|dining|practical|cultural",
      "title": "string",
      "description": "string",
      "estimatedItems": number,
      "priority": number,
      "preview": ["string"]
    }}
  ],
  "quickRecommendations": {{
    "topAttractions": ["string"],
    "mustTryFood": ["string"],
    "neighborhoods": ["string"],
    "budgetTips": ["string"]
  }}
}}"""


def _preference_lines(request: DestinationRequest) -> Optional[str]:
    prefs = request.preferences
    if prefs is None:
        return None
    labelled = {
        "Travel Season": prefs.time_of_year,
        "Trip Duration": prefs.duration,
        "Budget Level": prefs.budget,
        "Preferred Activities": prefs.trip_type,
        "Special Interests": prefs.special_activities,
        "Weather Preference": prefs.weather,
        "Travel Priority": prefs.priority,
        "Destination Type": prefs.destination_type,
        "Preferred Region": prefs.region,
    }
    lines = [f"- **{label}:** {value.strip()}" for label, value in labelled.items() if value and value.strip()]
    if not lines:
        return None
    return "## TRAVEL PREFERENCES\n" + "\n".join(lines)


def generate_destination_prompt(request: DestinationRequest) -> str:
    """Prompt asking for 3-6 destinations matched to a traveler persona."""
    traveler = request.traveler_type
    knowledge = request.destination_knowledge

    parts = [
        "You are an expert travel advisor specializing in personalized destination recommendations. "
        "Your task is to recommend 3-6 destinations that perfectly match this traveler's personality and preferences.",
        "## TRAVELER PROFILE\n"
        f"**Type:** {traveler.name} - {traveler.description}\n"
        f"**Destination Knowledge:** {knowledge.label} - {knowledge.description}",
    ]

    if request.exclude_destinations:
        excluded = "\n".join(f"- {name}" for name in request.exclude_destinations)
        parts.append(
            "## PREVIOUS RECOMMENDATIONS TO AVOID\n"
            "The following destinations have already been recommended and should NOT be included in your response:\n"
            f"{excluded}\n\n"
            "Please suggest completely different destinations that have not been mentioned before."
        )

    preference_block = _preference_lines(request)
    if preference_block:
        parts.append(preference_block)

    parts.append(
        """## RECOMMENDATION GUIDELINES
Match destinations to traveler type:
- **Explorer Travelers:** Adventure, spontaneity, unique experiences, social opportunities
- **Type A Travelers:** Efficiency, must-see attractions, well-planned itineraries, cultural highlights
- **Overthinker Travelers:** Safety, comfort, familiar cuisines, English-speaking areas, established tourism
- **Chill Travelers:** Relaxation, natural beauty, slower pace, wellness activities

For each destination include: name, country, a 2-3 sentence description, best time to visit,
4-5 key activities, a match reason tied to the traveler type, estimated daily cost for the
budget level, 3-4 highlights, and 3-4 paragraphs of practical details.

## RESPONSE FORMAT
Return ONLY ONE valid JSON object:

{
  "destinations": [{"name": "string", "country": "string", "description": "string", "bestTimeToVisit": "string", "keyActivities": ["string"], "matchReason": "string", "estimatedCost": "string", "highlights": [{"name": "string", "description": "string"}], "details": "string"}],
  "summary": "string"
}"""
    )
    return "\n\n".join(parts)
