"""
Canned travel tips served when the chat model cannot answer.
"""

from typing import List, Tuple


Reply = Tuple[str, List[str]]


NERJA_SKIING: Reply = (
    "Nerja is a coastal town in southern Spain, so there's no skiing nearby. The closest ski "
    "resort is Sierra Nevada near Granada, about 1.5 hours (120km) inland by car. In December "
    "Nerja stays mild (15-18°C), which suits beach walks, the Nerja Caves and coastal hikes.",
    ["What to do in Nerja?", "December weather?", "Day trips from Nerja?", "Nerja Caves info?"],
)

NERJA_TO_MALAGA: Reply = (
    "Nerja to Malaga is about 52km (32 miles), roughly 1 hour by car on the A-7 coastal highway. "
    "ALSA buses run regularly and take about 1.5 hours. The drive follows the Costa del Sol "
    "with good sea views.",
    ["Bus schedules?", "Car rental tips?", "Coastal route stops?", "Malaga attractions?"],
)

NERJA: Reply = (
    "Nerja is a charming town on Spain's Costa del Sol, known for its beaches, the Nerja Caves "
    "and the Balcón de Europa viewpoint. December is a good time to visit with mild weather "
    "(15-18°C) and fewer crowds.",
    ["Best beaches in Nerja?", "Nerja Caves tour?", "December activities?", "Where to eat?"],
)

# Checked in order; the first topic with a keyword in the message wins
TOPIC_REPLIES: List[Tuple[Tuple[str, ...], Reply]] = [
    (("bulgaria",), (
        "Bulgaria is a Balkan country with a long history, mountains and a Black Sea coastline. "
        "Sofia is the lively capital and Plovdiv has ancient Roman ruins. Try banitsa and shopska "
        "salad. It is very affordable for travellers.",
        ["What to see in Sofia?", "Bulgarian food tips?", "Best time to visit?", "Cultural customs?"],
    )),
    (("sofia",), (
        "Sofia mixes ancient and modern. Visit Alexander Nevsky Cathedral, walk Vitosha Boulevard, "
        "see the Roman ruins of Serdica and take a day trip up Vitosha Mountain. Museums are good "
        "and dining is cheap.",
        ["Day trips from Sofia?", "Sofia nightlife?", "Best restaurants?", "Transportation?"],
    )),
    (("plovdiv",), (
        "Plovdiv is Bulgaria's cultural capital and one of Europe's oldest cities. The Old Town has "
        "19th-century houses and the Roman Theatre still hosts performances. It was European "
        "Capital of Culture in 2019.",
        ["Old Town highlights?", "Roman Theatre events?", "Museums to visit?", "Where to stay?"],
    )),
    (("weather", "climate"), (
        "Check the local forecast before you go and pack layers, as the weather can change during "
        "the day. A light rain jacket and comfortable walking shoes cover most conditions.",
        ["What should I pack?", "Best time to visit?", "Seasonal activities?"],
    )),
    (("food", "restaurant", "eat"), (
        "For authentic local food, step away from the tourist areas and look for places where "
        "locals eat. Street food markets and your host's recommendations are good places to start.",
        ["Dietary restrictions?", "Food safety tips?", "Local specialties?", "Budget eating?"],
    )),
    (("transport", "getting around", "travel"), (
        "Download the local transport apps and look at day passes. City centres are often best on "
        "foot. For longer trips compare taxis, ride-sharing and public transport.",
        ["Airport transfers?", "Transport cards?", "Walking routes?"],
    )),
    (("safety", "safe"), (
        "Keep copies of your documents, stay aware of your surroundings and keep emergency contacts "
        "handy. Reading up on common local scams helps. Most destinations are very safe for tourists.",
        ["Emergency contacts?", "Common scams?", "Safe areas?"],
    )),
    (("culture", "customs", "etiquette"), (
        "Tipping, dress codes and greetings vary by country, so read up before you go. A few basic "
        "phrases in the local language go a long way.",
        ["Basic phrases?", "Dress codes?", "Tipping guide?"],
    )),
    (("hidden", "gems", "secret"), (
        "Ask locals for their favourite spots and check recent local blogs. The best finds are often "
        "a short walk away from the main tourist streets.",
        ["Local neighborhoods?", "Off-beaten path?", "Local events?"],
    )),
    (("pack", "luggage", "bring"), (
        "Pack light with clothes you can layer. Bring a portable charger, a universal adapter and "
        "any medication, and check your airline's baggage rules.",
        ["Carry-on essentials?", "Electronics?", "Clothing tips?"],
    )),
    (("money", "budget", "cost"), (
        "Tell your bank your travel dates so cards are not blocked. Carry some local cash for small "
        "vendors, and ATMs usually beat exchange counters on rates.",
        ["ATM locations?", "Tipping customs?", "Budget breakdown?"],
    )),
]

DEFAULT_REPLY: Reply = (
    "I'm here to help with any travel question, from local customs and food to transport and "
    "hidden gems. What would you like to know about your trip?",
    ["Food recommendations?", "Transportation?", "Cultural tips?", "Safety advice?"],
)


def fallback_reply(message: str) -> Reply:
    """Pick a canned reply by keyword; returns a fresh suggestions list"""
    text = message.lower()

    if "nerja" in text:
        if "ski" in text:
            reply = NERJA_SKIING
        elif "malaga" in text and ("far" in text or "distance" in text):
            reply = NERJA_TO_MALAGA
        else:
            reply = NERJA
    else:
        reply = next(
            (topic_reply for keywords, topic_reply in TOPIC_REPLIES if any(k in text for k in keywords)),
            DEFAULT_REPLY,
        )

    answer, suggestions = reply
    return answer, list(suggestions)
