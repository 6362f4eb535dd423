"""Deterministic display flavor: wave ratings, lake descriptions and idle messages.

Values are pseudo-random but seeded from their input with ``random.Random(str)``,
which hashes string seeds with SHA-512, so values are stable across runs
and independent of ``PYTHONHASHSEED``.
"""

import random

TOP_TIER_LAKES = frozenset({"Vierwaldstättersee", "Thunersee", "Genfersee", "Lac Léman"})
MID_TIER_LAKES = frozenset({"Zürichsee", "Bodensee", "Brienzersee"})

LAKE_DESCRIPTIONS = {
    "Zürichsee": "Beliebter Spot am Zürichsee mit guten Wellen bei Südwestwind.",
    "Vierwaldstättersee": (
        "Malerischer Ort am Vierwaldstättersee mit ausgezeichneten Wellen bei Föhn."
    ),
    "Bodensee": "Schöne Lage am Bodensee mit mittleren Wellen und internationaler Atmosphäre.",
    "Lac Léman": "Wunderschöner Ort am Genfersee mit hervorragenden Wellen bei Nordwind.",
    "Thunersee": "Spektakuläre Alpenkulisse am Thunersee mit guten Wellenbedingungen.",
    "Brienzersee": "Ruhiger Ort am türkisblauen Brienzersee mit moderaten Wellen.",
    "Lago Maggiore": "Mediterranes Flair am Lago Maggiore mit angenehmen Wellenbedingungen.",
    "Lago di Lugano": "Idyllischer Ort am Luganersee mit südlichem Charme und sanften Wellen.",
    "Bielersee": "Charmante Lage am Bielersee mit guten Wellenbedingungen für Anfänger.",
    "Neuenburgersee": "Weitläufiger See mit guten Windverhältnissen und moderaten Wellen.",
    "Murtensee": "Historischer Ort am kleinen Murtensee mit ruhigen Gewässern.",
    "Aare": "Flusslage mit interessanten Strömungsverhältnissen.",
    "Zugersee": "Malerischer Ort am Zugersee mit mittleren Wellen.",
    "Walensee": "Beeindruckende Bergkulisse am Walensee mit oft starken Winden.",
    "Hallwilersee": "Idyllischer kleiner See mit sanften Wellen, ideal für Anfänger.",
    "Aegerisee": "Ruhiger Bergsee mit gemäßigten Wellenbedingungen.",
    "Lac de Joux": (
        "Höchstgelegener Schifffahrtssee der Schweiz mit speziellen Windverhältnissen."
    ),
}
DEFAULT_DESCRIPTION = "Schöne Lage mit guten Wellenbedingungen."

NO_WAVES_MESSAGES = (
    "No more waves today – back in the lineup tomorrow!",
    "Flat for now, but fresh sets rolling in tomorrow!",
    "Wave machine's off – catch the next swell tomorrow!",
    "Boats are taking a break – tomorrow's a new ride!",
    "No wake waves left today – time to chill 'til sunrise!",
    "That's it for today – fresh waves incoming tomorrow!",
    "No waves, no worries – time to dry your wetsuit for tomorrow!",
    "The wave train's done for today – ride continues mañana!",
    "Today's waves are history – tomorrow's swell is brewing!",
    "Ship's on pause – fresh rides coming soon!",
    "That's all, folks! But don't worry, tomorrow's a new ride!",
    "No more bumps to ride – but tomorrow's looking rad!",
    "Last wave's gone – time to dream of tomorrow's rides!",
    "No more surf – the sea life needs some chill time too!",
    "Waves are done, but that post-pumping high lasts all night!",
)


def wave_rating_range(lake_name: str) -> tuple[int, int]:
    """Inclusive rating range for a lake's tier."""
    if lake_name in TOP_TIER_LAKES:
        return 3, 5
    if lake_name in MID_TIER_LAKES:
        return 2, 4
    return 1, 3


def wave_rating(lake_name: str, station_name: str) -> int:
    """Stable pseudo-random wave rating for a station, bounded by its lake tier."""
    low, high = wave_rating_range(lake_name)
    return random.Random(f"{lake_name}/{station_name}").randint(low, high)


def lake_description(lake_name: str) -> str:
    """Fixed description text for a lake."""
    return LAKE_DESCRIPTIONS.get(lake_name, DEFAULT_DESCRIPTION)


def no_waves_message(station_id: str) -> str:
    """Message shown when a station has no departures left today, stable per station."""
    return random.Random(station_id).choice(NO_WAVES_MESSAGES)
