from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response

from chefgenie.api.deps import get_repository, get_session, require_recipe
from chefgenie.domain.Session import SessionState
from chefgenie.events.Event_Bus import SHOPPING_LIST_CHANGED, publish
from chefgenie.infra.State_Repository import StateRepository
from chefgenie.infra.pdf_utils import generate_pdf_for_shopping_list
from chefgenie.logic.shopping.display import (
    describe_item, estimated_total, group_by_store, progress, render_text
)
from chefgenie.utilities.validators import SUPERMARKET_PATTERN, RecipeRef

router = APIRouter(prefix="/api/shopping-list", tags=["shopping-list"])


def _changed(session: SessionState, repo: StateRepository, action: str) -> None:
    repo.save_shopping_list(session.shopping_list)
    publish(SHOPPING_LIST_CHANGED, {"action": action, "count": len(session.shopping_list)})


@router.get("")
def get_shopping_list(shop_at: str = Query(default="Any", pattern=SUPERMARKET_PATTERN),
                      session: SessionState = Depends(get_session)):
    """
    Shopping list with derived labels, grouped by store.

    Response JSON structure:
        {
          "count": <int>, "checked": <int>, "progress": <float>,
          "estimated_total": <float>,
          "items": [ { id, name, store, checked, contributions, display, price, recipes, search_url } ],
          "groups": [ { "store": <str>, "items": [<item id>, ...] } ]
        }
    """
    items = session.shopping_list.items
    return {
        "count": len(items),
        "checked": sum(1 for i in items if i.checked),
        "progress": progress(items),
        "estimated_total": estimated_total(items),
        "items": [describe_item(i, shop_at) for i in items],
        "groups": [
            {"store": store, "items": [i.id for i in group]}
            for store, group in group_by_store(items, shop_at).items()
        ],
    }


@router.post("/toggle-recipe")
def toggle_recipe(payload: RecipeRef,
                  session: SessionState = Depends(get_session),
                  repo: StateRepository = Depends(get_repository)):
    """Add the recipe's ingredients, or retract them when the recipe is already in the list."""
    recipe = require_recipe(session, payload.recipe_id)
    added = session.shopping_list.toggle_recipe(recipe)
    _changed(session, repo, "add_recipe" if added else "remove_recipe")
    return {"title": recipe.title, "inShoppingList": added, "count": len(session.shopping_list)}


@router.post("/items/{item_id}/toggle")
def toggle_item(item_id: str,
                session: SessionState = Depends(get_session),
                repo: StateRepository = Depends(get_repository)):
    if not session.shopping_list.toggle_item(item_id):
        raise HTTPException(status_code=404, detail="Item not found")
    _changed(session, repo, "toggle_item")
    item = session.shopping_list.get_item(item_id)
    return {"id": item_id, "checked": item.checked}


@router.delete("/items/{item_id}")
def remove_item(item_id: str,
                session: SessionState = Depends(get_session),
                repo: StateRepository = Depends(get_repository)):
    if not session.shopping_list.remove_item(item_id):
        raise HTTPException(status_code=404, detail="Item not found")
    _changed(session, repo, "remove_item")
    return {"success": True, "count": len(session.shopping_list)}


@router.delete("")
def clear_list(session: SessionState = Depends(get_session),
               repo: StateRepository = Depends(get_repository)):
    session.shopping_list.clear()
    _changed(session, repo, "clear")
    return {"success": True, "count": 0}


@router.get("/pdf")
def export_pdf(shop_at: str = Query(default="Any", pattern=SUPERMARKET_PATTERN),
               session: SessionState = Depends(get_session)):
    pdf = generate_pdf_for_shopping_list(session.shopping_list.items, shop_at)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="shopping_list.pdf"'},
    )


@router.get("/text", response_class=PlainTextResponse)
def export_text(shop_at: str = Query(default="Any", pattern=SUPERMARKET_PATTERN),
                session: SessionState = Depends(get_session)):
    return render_text(session.shopping_list.items, shop_at)
