# Schemas package (re-export feature modules for stable imports)
from .settings.settings import *
