# Importing the table models registers them on SQLModel.metadata
from accounthub.models.database import *  # noqa: F401,F403
