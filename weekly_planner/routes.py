from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse

from state import load_state

router = APIRouter(prefix="/plan")


@router.post("/day")
def set_day_activity(
    request: Request,
    day_index: int = Form(...),
    activity_type: str = Form(...),
):
    """
    Change one day's activity type and go back to the calculator page.
    """
    state = load_state(request.session)
    try:
        state.set_day_activity(day_index, activity_type)
    except (IndexError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return RedirectResponse(url="/", status_code=303)


@router.post("/copy")
def copy_day(request: Request, source_index: int = Form(...)):
    """
    Apply one day's activity type to the whole week.
    """
    state = load_state(request.session)
    try:
        state.copy_day(source_index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return RedirectResponse(url="/", status_code=303)
