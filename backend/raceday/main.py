from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from raceday.api.v1.routes.health import router as health_router
from raceday.api.v1.routes.next_races import router as next_races_router


app = FastAPI(title="Raceday API")

# The schedule page is served from a different origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(next_races_router)
