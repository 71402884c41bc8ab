from comingsoon.core.database import Base

from .site_config import SiteConfig
from .subscriber import STATUS_ACTIVE, STATUS_UNSUBSCRIBED, Subscriber
