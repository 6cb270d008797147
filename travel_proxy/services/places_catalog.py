"""
Curated places database and the estimation helpers used when building place
suggestions.
"""

import random
import re
from typing import Any, Dict, List, Optional

from travel_proxy.models.responses import Place


DEFAULT_CATEGORY = "attractions"

PEXELS_LANDMARK = "https://images.pexels.com/photos/1388030/pexels-photo-1388030.jpeg"
PEXELS_FOOD = "https://images.pexels.com/photos/1640777/pexels-photo-1640777.jpeg"

DEFAULT_IMAGES = {
    "attractions": PEXELS_LANDMARK,
    "restaurants": PEXELS_FOOD,
    "culture": PEXELS_LANDMARK,
    "activities": PEXELS_LANDMARK,
    "nature": PEXELS_LANDMARK,
}

# Category to Google Places type
GOOGLE_PLACE_TYPES = {
    "attractions": "tourist_attraction",
    "restaurants": "restaurant",
    "culture": "museum",
    "activities": "amusement_park",
    "nature": "park",
    "hotels": "lodging",
    "shopping": "shopping_mall",
    "nightlife": "night_club",
}

# Typical spend in GBP per Google price level (0-4)
PRICE_LEVEL_COSTS = {
    "attractions": [0, 8, 15, 25, 40],
    "restaurants": [10, 20, 35, 55, 85],
    "culture": [0, 5, 12, 20, 35],
    "activities": [5, 15, 30, 50, 80],
    "nature": [0, 3, 8, 15, 25],
    "hotels": [40, 80, 120, 180, 300],
    "shopping": [5, 15, 30, 60, 120],
    "nightlife": [10, 20, 40, 70, 120],
}

CURATED_PLACES: Dict[str, Dict[str, List[Dict[str, Any]]]] = {
    "marbella": {
        "attractions": [
            {
                "id": "marbella-old-town",
                "name": "Marbella Old Town (Casco Antiguo)",
                "description": "Charming historic quarter with narrow cobblestone streets, whitewashed buildings, and traditional Andalusian architecture.",
                "location": "Casco Antiguo, Marbella",
                "coordinates": {"lat": 36.5108, "lng": -4.8856},
                "rating": 4.6,
                "estimated_cost_gbp": 0,
                "duration_hours": 2,
                "booking_required": False,
                "image": PEXELS_LANDMARK,
            },
            {
                "id": "puerto-banus",
                "name": "Puerto Banús Marina",
                "description": "Luxury marina famous for its upscale shops, restaurants, and impressive yachts.",
                "location": "Puerto Banús, Marbella",
                "coordinates": {"lat": 36.4848, "lng": -4.9516},
                "rating": 4.4,
                "estimated_cost_gbp": 0,
                "duration_hours": 2.5,
                "booking_required": False,
                "image": PEXELS_LANDMARK,
            },
        ],
        "restaurants": [
            {
                "id": "dani-garcia",
                "name": "Dani García Restaurant",
                "description": "Michelin-starred restaurant offering innovative Andalusian cuisine with modern techniques.",
                "location": "Puente Romano, Marbella",
                "coordinates": {"lat": 36.4977, "lng": -4.9089},
                "rating": 4.8,
                "estimated_cost_gbp": 150,
                "duration_hours": 3,
                "booking_required": True,
                "image": PEXELS_FOOD,
            },
        ],
    },
    "barcelona": {
        "attractions": [
            {
                "id": "sagrada-familia",
                "name": "Sagrada Família",
                "description": "Antoni Gaudí's masterpiece basilica, a UNESCO World Heritage site with stunning architecture.",
                "location": "Carrer de Mallorca, 401, Eixample, Barcelona",
                "coordinates": {"lat": 41.4036, "lng": 2.1744},
                "rating": 4.8,
                "estimated_cost_gbp": 26,
                "duration_hours": 2,
                "booking_required": True,
                "image": PEXELS_LANDMARK,
            },
            {
                "id": "park-guell",
                "name": "Park Güell",
                "description": "Whimsical park designed by Gaudí featuring colorful mosaics and panoramic city views.",
                "location": "Carrer d'Olot, s/n, Gràcia, Barcelona",
                "coordinates": {"lat": 41.4145, "lng": 2.1527},
                "rating": 4.6,
                "estimated_cost_gbp": 10,
                "duration_hours": 2.5,
                "booking_required": True,
                "image": PEXELS_LANDMARK,
            },
        ],
        "restaurants": [
            {
                "id": "cal-pep",
                "name": "Cal Pep",
                "description": "Legendary tapas bar serving exceptional seafood and traditional Catalan dishes.",
                "location": "Plaça de les Olles, 8, Born, Barcelona",
                "coordinates": {"lat": 41.3833, "lng": 2.1833},
                "rating": 4.7,
                "estimated_cost_gbp": 45,
                "duration_hours": 1.5,
                "booking_required": False,
                "image": PEXELS_FOOD,
            },
        ],
    },
    "valencia": {
        "attractions": [
            {
                "id": "city-of-arts-sciences",
                "name": "City of Arts and Sciences",
                "description": "Futuristic architectural complex featuring the Oceanogràfic aquarium and Science Museum.",
                "location": "Av. del Professor López Piñero, 7, Valencia",
                "coordinates": {"lat": 39.4561, "lng": -0.3545},
                "rating": 4.7,
                "estimated_cost_gbp": 35,
                "duration_hours": 4,
                "booking_required": True,
                "image": PEXELS_LANDMARK,
            },
        ],
        "restaurants": [
            {
                "id": "casa-roberto-valencia",
                "name": "Casa Roberto",
                "description": "Authentic Valencian restaurant famous for traditional paella valenciana.",
                "location": "Carrer de Mestre Gozalbo, 19, Valencia",
                "coordinates": {"lat": 39.4699, "lng": -0.3763},
                "rating": 4.6,
                "estimated_cost_gbp": 35,
                "duration_hours": 1.5,
                "booking_required": True,
                "image": PEXELS_FOOD,
            },
        ],
    },
}

GENERIC_TEMPLATES: Dict[str, List[Dict[str, Any]]] = {
    "attractions": [
        {
            "name": "{city} Historic Center",
            "description": "Explore the charming historic center of {city} with its traditional architecture and cultural landmarks.",
            "estimated_cost_gbp": 0,
            "duration_hours": 2,
            "booking_required": False,
        },
        {
            "name": "{city} Main Square",
            "description": "The heart of {city}, featuring beautiful architecture and vibrant atmosphere.",
            "estimated_cost_gbp": 0,
            "duration_hours": 1,
            "booking_required": False,
        },
    ],
    "restaurants": [
        {
            "name": "Local Flavors of {city}",
            "description": "Authentic local restaurant serving traditional {city} cuisine with fresh, regional ingredients.",
            "estimated_cost_gbp": 35,
            "duration_hours": 1.5,
            "booking_required": True,
        },
    ],
    "culture": [
        {
            "name": "{city} Cultural Center",
            "description": "Local cultural center showcasing the history, art, and traditions of {city}.",
            "estimated_cost_gbp": 8,
            "duration_hours": 1.5,
            "booking_required": False,
        },
    ],
    "activities": [
        {
            "name": "{city} Walking Tour",
            "description": "Guided walking tour showcasing the best of {city} with local insights and hidden gems.",
            "estimated_cost_gbp": 20,
            "duration_hours": 3,
            "booking_required": True,
        },
    ],
    "nature": [
        {
            "name": "{city} Natural Area",
            "description": "Beautiful natural area perfect for relaxation and enjoying the local landscape.",
            "estimated_cost_gbp": 0,
            "duration_hours": 2,
            "booking_required": False,
        },
    ],
}


def slugify(value: str) -> str:
    return re.sub(r"\s+", "-", value.strip().lower())


def default_image(category: str) -> str:
    return DEFAULT_IMAGES.get(category, DEFAULT_IMAGES[DEFAULT_CATEGORY])


def google_place_type(category: str) -> str:
    return GOOGLE_PLACE_TYPES.get(category, GOOGLE_PLACE_TYPES[DEFAULT_CATEGORY])


def estimate_cost(category: str, rng: Optional[random.Random] = None) -> int:
    """Rough spend in GBP when no price information is available"""
    rng = rng or random
    ranges = {
        "attractions": (10, 29),
        "restaurants": (25, 64),
        "hotels": (80, 179),
        "activities": (15, 44),
        "culture": (8, 22),
        "nature": (5, 14),
    }
    if category not in ranges:
        return 20
    low, high = ranges[category]
    return rng.randint(low, high)


def estimate_duration(category: str, rng: Optional[random.Random] = None) -> float:
    """Rough visit length in hours"""
    rng = rng or random
    if category == "hotels":
        return 0
    if category == "restaurants":
        return round(1.5 + rng.random(), 1)
    ranges = {
        "attractions": (1, 2),
        "activities": (2, 4),
        "culture": (1, 2),
        "nature": (2, 4),
    }
    if category not in ranges:
        return 2
    return rng.randint(*ranges[category])


def estimate_cost_from_price_level(
    price_level: Optional[int],
    category: str,
    rng: Optional[random.Random] = None
) -> float:
    if price_level is None:
        return estimate_cost(category, rng)

    costs = PRICE_LEVEL_COSTS.get(category, PRICE_LEVEL_COSTS[DEFAULT_CATEGORY])
    return costs[max(0, min(price_level, 4))]


def should_require_booking(place: Dict[str, Any], category: str) -> bool:
    """Guess whether a Google place needs booking ahead"""
    types = place.get("types") or []
    price_level = place.get("price_level") or 0
    rating = place.get("rating") or 0

    if "restaurant" in types and price_level >= 2:
        return True
    if any(t in types for t in ("museum", "amusement_park", "lodging", "spa")):
        return True
    if "tourist_attraction" in types and rating >= 4.5:
        return True

    return category in ("restaurants", "culture", "hotels")


def describe_place(place: Dict[str, Any]) -> str:
    """Build a short description for a Google place from its types and rating"""
    name = place.get("name", "This place")
    rating = f"{place['rating']}/5 stars" if place.get("rating") else "highly rated"
    types = place.get("types") or []

    if "restaurant" in types or "food" in types:
        return f"{name} is a popular dining spot offering delicious local cuisine. With {rating}, it's a great choice for experiencing authentic flavors and local culinary traditions."
    if "tourist_attraction" in types or "museum" in types:
        return f"{name} is a must-visit attraction that showcases the local culture and history. Rated {rating}, it offers visitors an enriching and memorable experience."
    if "park" in types or "natural_feature" in types:
        return f"{name} is a beautiful natural space perfect for relaxation and outdoor activities. With {rating}, it's an ideal spot to enjoy nature and scenic views."
    if "shopping_mall" in types or "store" in types:
        return f"{name} is a popular shopping destination offering a variety of goods and local products. Rated {rating}, it's perfect for finding unique items and souvenirs."
    if "lodging" in types:
        return f"{name} provides comfortable accommodation with excellent service. With {rating}, it's a great base for exploring the local area."
    return f"{name} is a popular local destination that offers visitors an authentic experience. Rated {rating}, it's well worth a visit during your stay."


def _destination_key(destination: str) -> str:
    return re.sub(r"\s+", "", destination.lower()).replace(",", "", 1)


def generic_places(destination: str, category: str, rng: Optional[random.Random] = None) -> List[Place]:
    """Templated suggestions for destinations without curated data"""
    rng = rng or random
    city = destination.split(",")[0].strip()
    templates = GENERIC_TEMPLATES.get(category, GENERIC_TEMPLATES[DEFAULT_CATEGORY])

    places = []
    for index, template in enumerate(templates, start=1):
        places.append(Place(
            id=f"{slugify(city)}-{category}-{index}",
            name=template["name"].format(city=city),
            description=template["description"].format(city=city),
            location=f"{city} City Center",
            coordinates={"lat": 0, "lng": 0},
            category=category,
            rating=round(4.0 + rng.random() * 0.8, 1),
            estimated_cost_gbp=template["estimated_cost_gbp"],
            duration_hours=template["duration_hours"],
            booking_required=template["booking_required"],
            image=default_image(category),
        ))
    return places


def curated_places(destination: str, category: str, rng: Optional[random.Random] = None) -> List[Place]:
    """
    Look up curated places for a destination.

    Tries an exact destination match, then a partial one, and finally falls
    back to generic templated places so the result is never empty.
    """
    dest_key = _destination_key(destination)
    records = CURATED_PLACES.get(dest_key, {}).get(category, [])

    if not records:
        for key, by_category in CURATED_PLACES.items():
            if key in dest_key or dest_key.split(",")[0] in key:
                records = by_category.get(category, [])
                if records:
                    break

    if not records:
        return generic_places(destination, category, rng)

    return [Place(**record, category=category) for record in records]
