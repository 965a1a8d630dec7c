from sowplan.models.user import User
from sowplan.models.season import Season
from sowplan.models.plant import PlantType, PlantProfile, Variety
from sowplan.models.crop import CropPlan, CropTask

__all__ = [
    "User",
    "Season",
    "PlantType",
    "PlantProfile",
    "Variety",
    "CropPlan",
    "CropTask",
]
