"""Pydantic schemas for API payloads, filters and requests."""

from .activity import *  # noqa: F403
from .booking import *  # noqa: F403
from .common import *  # noqa: F403
from .destination import *  # noqa: F403
from .info import *  # noqa: F403
from .itinerary import *  # noqa: F403
from .payment import *  # noqa: F403
from .service import *  # noqa: F403
from .tour import *  # noqa: F403
