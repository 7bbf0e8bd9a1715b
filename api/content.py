"""Read-only content endpoints: missions and the ability catalog."""

from fastapi import APIRouter, Request

from content.missions import MISSIONS

router = APIRouter()


@router.get("/missions")
def list_missions() -> list[dict]:
    return [
        {
            "id": mission["id"],
            "name": mission["name"],
            "description": mission["description"],
            "objective": mission.get("objective"),
        }
        for mission in MISSIONS.values()
    ]


@router.get("/abilities")
def list_abilities(request: Request) -> list[dict]:
    return [ability.model_dump(mode="json") for ability in request.app.state.catalog]
