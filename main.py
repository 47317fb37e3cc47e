import logging
import secrets
from typing import Optional

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from calculator import (
    ACTIVITY_MAP,
    CARB_CYCLING,
    CARBS_RANGE,
    FAT_RANGE,
    PROTEIN_RANGE,
)
from models import CalculationResult
from state import SESSION_KEY, CalculatorState, load_state
from validators import WEIGHT_RANGE_KG, CalculatorForm, describe_errors
from weekly_planner.config import (
    DEFAULT_CARBS_PER_KG,
    DEFAULT_FAT_PER_KG,
    DEFAULT_PROTEIN_PER_KG,
    LOG_LEVEL,
    SESSION_SECRET_KEY,
    TEMPLATES_DIR,
)
from weekly_planner.routes import router as weekly_plan_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if not SESSION_SECRET_KEY:
    # Sessions will not survive a restart with a per-process key
    SESSION_SECRET_KEY = secrets.token_urlsafe(32)
    logger.warning(
        "SESSION_SECRET_KEY not set in .env. Using a temporary key for this process."
    )

app = FastAPI(title="Macro Calculator")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Page state (profile, sliders, weekly plan) lives in the signed session cookie
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET_KEY)

app.include_router(weekly_plan_router)


def render_page(
    request: Request,
    state: CalculatorState,
    result: Optional[CalculationResult] = None,
    error: Optional[str] = None,
    status_code: int = 200,
) -> HTMLResponse:
    if result is None:
        result = state.recompute()

    return templates.TemplateResponse(
        request,
        "form.html",
        {
            "state": state,
            "result": result,
            "error": error,
            "activity_levels": list(ACTIVITY_MAP),
            "day_types": list(CARB_CYCLING),
            "protein_range": PROTEIN_RANGE,
            "fat_range": FAT_RANGE,
            "carbs_range": CARBS_RANGE,
            "weight_range": WEIGHT_RANGE_KG,
        },
        status_code=status_code,
    )


@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    state = load_state(request.session)
    return render_page(request, state)


@app.post("/calculate", response_class=HTMLResponse)
async def calculate_view(
    request: Request,
    height: float = Form(...),
    height_unit: str = Form("cm"),
    weight: float = Form(...),
    weight_unit: str = Form("kg"),
    age: float = Form(...),
    sex: str = Form(...),
    activity_level: str = Form(...),
    protein_per_kg: float = Form(DEFAULT_PROTEIN_PER_KG),
    fat_per_kg: float = Form(DEFAULT_FAT_PER_KG),
    carbs_per_kg: float = Form(DEFAULT_CARBS_PER_KG),
    carb_cycling: bool = Form(False),
    cycling_tier: str = Form("moderate"),
):
    state = load_state(request.session)

    try:
        form = CalculatorForm(
            height=height,
            height_unit=height_unit,
            weight=weight,
            weight_unit=weight_unit,
            age=age,
            sex=sex,
            activity_level=activity_level,
            protein_per_kg=protein_per_kg,
            fat_per_kg=fat_per_kg,
            carbs_per_kg=carbs_per_kg,
            carb_cycling=carb_cycling,
            cycling_tier=cycling_tier,
        )
    except ValidationError as e:
        error = describe_errors(e)
        logger.info("Rejected form input: %s", error)
        return render_page(request, state, error=error, status_code=400)

    result = state.update(
        profile=form.to_profile(),
        activity_level=form.activity_level,
        protein_per_kg=form.protein_per_kg,
        fat_per_kg=form.fat_per_kg,
        carbs_per_kg=form.carbs_per_kg,
        carb_cycling=form.carb_cycling,
        cycling_tier=form.cycling_tier,
    )
    return render_page(request, state, result)


@app.post("/reset")
async def reset_view(request: Request):
    request.session.pop(SESSION_KEY, None)
    return RedirectResponse(url="/", status_code=303)
