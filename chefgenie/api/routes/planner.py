from fastapi import APIRouter, Depends, Request

from chefgenie.api.deps import get_oracle, get_repository, get_session, schedule_images
from chefgenie.api.routes.recipes import recipe_view
from chefgenie.domain.Session import SessionState
from chefgenie.events.Event_Bus import PLAN_GENERATED, SHOPPING_LIST_CHANGED, publish
from chefgenie.infra.State_Repository import StateRepository
from chefgenie.logic.planning.aggregators import add_plan_to_list, generate_plan
from chefgenie.utilities.validators import PlanRequest

router = APIRouter(prefix="/api/plan", tags=["plan"])


def plan_view(session: SessionState) -> dict:
    if session.plan is None:
        return {"plan": None}
    days = {}
    for day, slots in session.plan.items():
        days[day] = {
            "lunch": recipe_view(session, slots.lunch) if slots.lunch else None,
            "dinner": recipe_view(session, slots.dinner) if slots.dinner else None,
        }
    return {"plan": days}


@router.get("")
def get_plan(session: SessionState = Depends(get_session)):
    return plan_view(session)


@router.post("/generate")
async def regenerate_plan(request: Request, payload: PlanRequest,
                          session: SessionState = Depends(get_session),
                          repo: StateRepository = Depends(get_repository),
                          oracle=Depends(get_oracle)):
    """Replace the weekly plan. On failure the previous plan is kept and generated=False."""
    plan = await generate_plan(session, oracle, payload.protein_values(), payload.max_time,
                               payload.difficulty, payload.supermarket)
    if plan is None:
        return dict(plan_view(session), generated=False)
    repo.save_plan(session.plan)
    repo.save_cache(session.cache)
    publish(PLAN_GENERATED, {"recipes": len(plan.recipes())})
    schedule_images(request, plan.recipes())
    return dict(plan_view(session), generated=True)


@router.post("/add-to-list")
def add_week_to_list(session: SessionState = Depends(get_session),
                     repo: StateRepository = Depends(get_repository)):
    """Add every planned recipe that is not in the shopping list yet."""
    added = add_plan_to_list(session.plan, session.shopping_list)
    if added:
        repo.save_shopping_list(session.shopping_list)
        publish(SHOPPING_LIST_CHANGED, {"action": "add_plan", "count": len(session.shopping_list)})
        message = f"Added {added} recipes to your shopping list."
    else:
        message = "All items are already in your list!"
    return {"added": added, "message": message}
