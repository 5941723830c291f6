"""
Locale label maps for access presentation.

One map per locale; every map carries the same keys. Placeholders use
str.format() syntax.
"""

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        # Units (countdown style)
        "unit_day_short": "d",
        "unit_hour_short": "h",
        "unit_minute_short": "m",
        "unit_second_short": "s",
        # Units (long style)
        "unit_day": "day",
        "unit_days": "days",
        "unit_hour": "hour",
        "unit_hours": "hours",
        "unit_minute": "minute",
        "unit_minutes": "minutes",
        "unit_second": "second",
        "unit_seconds": "seconds",
        "left_suffix": "left",
        "relative_future": "in {value}",
        "relative_past": "{value} ago",
        "relative_now": "now",
        "expired": "Expired",
        "not_available": "N/A",
        # Status text
        "status_none": "No Active VIP Subscription",
        "status_anonymous": "Not signed in",
        "status_trial": "{trial_days}-Day VIP Trial ({days}d {hours}h left)",
        "status_active": "Active VIP Subscription ({days}d {hours}h left)",
        "status_trial_expired": "{trial_days}-Day VIP Trial Expired",
        "status_expired": "VIP Subscription Expired",
        # Urgency messages
        "message_expired": "VIP access has expired",
        "message_critical": "VIP access expires within 1 hour!",
        "message_high": "VIP access expires soon",
        "message_medium": "VIP access expires today",
        "message_low": "{days} days of VIP access left",
        "action_expired": "Renew your subscription now",
        "action_critical": "Renew your subscription urgently",
        "action_high": "We recommend renewing your subscription",
        "action_medium": "Don't forget to renew",
        "action_low": "Enjoy your VIP services",
        # Notifications
        "notify_trial_24h_title": "{trial_days}-Day VIP Trial ending soon",
        "notify_trial_24h_message": "{hours} hours of VIP access left.",
        "notify_trial_24h_action": "Upgrade now",
        "notify_trial_12h_title": "VIP Trial ends today!",
        "notify_trial_12h_message": "Only {hours} hours left. Don't lose your access!",
        "notify_trial_12h_action": "Upgrade immediately",
        "notify_trial_1h_title": "VIP Trial ends within 1 hour!",
        "notify_trial_1h_message": "Upgrade now to keep uninterrupted access.",
        "notify_trial_1h_action": "Urgent upgrade",
        "notify_expired_title": "VIP access expired",
        "notify_expired_message": "Upgrade now to get your VIP features back.",
        "notify_expired_action": "Activate subscription",
        # Trial upsell
        "upgrade_urgent": "Don't lose your VIP access! Upgrade now.",
        "upgrade_relaxed": "Enjoy the VIP experience and upgrade for continued access.",
        "benefits": "AI Prompt Generator full access|Unlimited Arbitrage Calculator|Exclusive VIP Tips|Priority support|Mobile-optimized experience",
        # Absolute dates
        "expiry_format": "%b %d, %Y %H:%M UTC",
    },
    "hu": {
        "unit_day_short": "n",
        "unit_hour_short": "ó",
        "unit_minute_short": "p",
        "unit_second_short": "mp",
        "unit_day": "nap",
        "unit_days": "nap",
        "unit_hour": "óra",
        "unit_hours": "óra",
        "unit_minute": "perc",
        "unit_minutes": "perc",
        "unit_second": "másodperc",
        "unit_seconds": "másodperc",
        "left_suffix": "van hátra",
        "relative_future": "{value} múlva",
        "relative_past": "{value} ezelőtt",
        "relative_now": "most",
        "expired": "Lejárt",
        "not_available": "N/A",
        "status_none": "Nincs Aktív VIP Előfizetés",
        "status_anonymous": "Nincs bejelentkezve",
        "status_trial": "{trial_days} Napos VIP Trial ({days}n {hours}ó hátra)",
        "status_active": "Aktív VIP Előfizetés ({days}n {hours}ó hátra)",
        "status_trial_expired": "{trial_days} Napos VIP Trial Lejárt",
        "status_expired": "VIP Előfizetés Lejárt",
        "message_expired": "VIP hozzáférés lejárt",
        "message_critical": "VIP hozzáférés 1 órán belül lejár!",
        "message_high": "VIP hozzáférés hamarosan lejár",
        "message_medium": "VIP hozzáférés ma lejár",
        "message_low": "{days} nap VIP hozzáférés van hátra",
        "action_expired": "Azonnali megújítás szükséges",
        "action_critical": "Sürgősen újítsd meg előfizetésed",
        "action_high": "Javasoljuk az előfizetés megújítását",
        "action_medium": "Ne felejts el megújítani",
        "action_low": "Élvezd a VIP szolgáltatásokat",
        "notify_trial_24h_title": "{trial_days} Napos VIP Trial hamarosan lejár",
        "notify_trial_24h_message": "{hours} óra van hátra a VIP hozzáférésedből.",
        "notify_trial_24h_action": "Frissítés most",
        "notify_trial_12h_title": "VIP Trial ma lejár!",
        "notify_trial_12h_message": "Csak {hours} óra van hátra. Ne veszítsd el a hozzáférést!",
        "notify_trial_12h_action": "Azonnali frissítés",
        "notify_trial_1h_title": "VIP Trial 1 órán belül lejár!",
        "notify_trial_1h_message": "Sürgősen frissítsd előfizetésed a folyamatos hozzáférésért.",
        "notify_trial_1h_action": "Sürgős frissítés",
        "notify_expired_title": "VIP hozzáférés lejárt",
        "notify_expired_message": "Frissíts most a VIP funkciók visszaszerzéséért.",
        "notify_expired_action": "Előfizetés aktiválása",
        "upgrade_urgent": "Ne veszítsd el VIP hozzáférésedet! Frissíts most.",
        "upgrade_relaxed": "Élvezd a VIP élményt, és frissíts a folyamatos hozzáférésért.",
        "benefits": "AI Prompt Generator teljes hozzáférés|Arbitrage Calculator korlátlan használat|VIP Tips exkluzív tartalmak|Prioritás támogatás|Mobil optimalizált élmény",
        "expiry_format": "%Y. %m. %d. %H:%M UTC",
    },
}


def supported_locales() -> List[str]:
    return sorted(LABELS)


def normalize_locale(locale: str = None) -> str:
    """Map 'hu-HU', 'HU' etc. onto a known locale, falling back to English"""
    code = (locale or DEFAULT_LOCALE).strip().lower().replace("_", "-").split("-", 1)[0]
    if code not in LABELS:
        logger.debug(f"Unsupported locale '{locale}', falling back to {DEFAULT_LOCALE}")
        return DEFAULT_LOCALE
    return code


def get_labels(locale: str = None) -> Dict[str, str]:
    return LABELS[normalize_locale(locale)]


def label(key: str, locale: str = None, **values) -> str:
    """Look up a label and fill in its placeholders"""
    text = get_labels(locale)[key]
    return text.format(**values) if values else text


def benefits(locale: str = None) -> List[str]:
    return label("benefits", locale).split("|")
