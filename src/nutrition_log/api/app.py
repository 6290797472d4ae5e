"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from typing import Annotated

from fastapi import FastAPI, Path, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from nutrition_log.api.schemas import (
    FoodItemCreate,
    MealCreate,
    MealItemCreate,
    MealItemUpdate,
    MealUpdate,
    QuickLogPayload,
    TargetsPayload,
    UserCreate,
    UserOut,
)
from nutrition_log.app_logging import configure_logging
from nutrition_log.containers import AppContainer
from nutrition_log.domain import errors
from nutrition_log.domain.foods import FoodItem
from nutrition_log.domain.meals import MealDetail, MealItemRecord, MealRecord
from nutrition_log.domain.stats import DailyData, WeeklyData
from nutrition_log.seed import ensure_demo_user, seed_catalog
from nutrition_log.services.reports import render_daily_report

EntityId = Annotated[int, Path(gt=0)]


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            if state_container.settings.seed_catalog:
                seed_catalog(state_container.food_service)
            if state_container.settings.demo_username:
                ensure_demo_user(
                    state_container.user_service,
                    state_container.settings.demo_username,
                    state_container.settings.demo_password,
                )
        except Exception:
            logger.exception("Failed to seed startup data")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(errors.ValidationError)
    async def validation_error(_: Request, exc: errors.ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"message": str(exc)}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _format_request_errors(exc)},
        )

    @app.exception_handler(errors.NotFoundError)
    async def not_found(_: Request, exc: errors.NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"message": str(exc)}
        )

    @app.exception_handler(errors.NutritionLogError)
    async def internal_error(
        request: Request, exc: errors.NutritionLogError
    ) -> JSONResponse:
        logger.exception(
            "Unhandled nutrition log error",
            exc_info=exc,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/users", status_code=status.HTTP_201_CREATED)
    def create_user(payload: UserCreate, request: Request) -> UserOut:
        """Create a user."""
        state_container: AppContainer = request.app.state.container
        user = state_container.user_service.create_user(
            payload.username, payload.password, payload.daily_targets.to_domain()
        )
        return UserOut.from_record(user)

    @app.get("/api/users/{user_id}")
    def get_user(user_id: EntityId, request: Request) -> UserOut:
        """Return a user."""
        state_container: AppContainer = request.app.state.container
        return UserOut.from_record(state_container.user_service.get_user(user_id))

    @app.patch("/api/users/{user_id}/targets")
    def update_targets(
        user_id: EntityId, payload: TargetsPayload, request: Request
    ) -> UserOut:
        """Replace a user's daily targets."""
        state_container: AppContainer = request.app.state.container
        user = state_container.user_service.update_targets(
            user_id, payload.to_domain()
        )
        return UserOut.from_record(user)

    @app.get("/api/food-items")
    def list_food_items(request: Request, q: str | None = None) -> list[FoodItem]:
        """Browse the catalog; a blank query lists everything."""
        state_container: AppContainer = request.app.state.container
        if not q or not q.strip():
            return state_container.food_service.list_all()
        return state_container.food_service.search(q)

    @app.get("/api/food-items/search")
    def search_food_items(request: Request, q: str = "") -> list[FoodItem]:
        """Search the catalog by name."""
        state_container: AppContainer = request.app.state.container
        return state_container.food_service.search(q)

    @app.post("/api/food-items", status_code=status.HTTP_201_CREATED)
    def create_food_item(payload: FoodItemCreate, request: Request) -> FoodItem:
        """Add a catalog entry."""
        state_container: AppContainer = request.app.state.container
        return state_container.food_service.create(payload.model_dump())

    @app.get("/api/users/{user_id}/meals")
    def list_meals(
        user_id: EntityId, request: Request, day: date = Query(alias="date")
    ) -> list[MealDetail]:
        """Return a user's meals for a day."""
        state_container: AppContainer = request.app.state.container
        return state_container.meal_service.list_meals(user_id, day)

    @app.get("/api/meals/{meal_id}")
    def get_meal(meal_id: EntityId, request: Request) -> MealDetail:
        """Return a meal with items and totals."""
        state_container: AppContainer = request.app.state.container
        return state_container.meal_service.get_meal(meal_id)

    @app.post("/api/meals", status_code=status.HTTP_201_CREATED)
    def create_meal(payload: MealCreate, request: Request) -> MealRecord:
        """Create a meal."""
        state_container: AppContainer = request.app.state.container
        return state_container.meal_service.create_meal(
            payload.user_id, payload.name, payload.date, payload.time
        )

    @app.patch("/api/meals/{meal_id}")
    def update_meal(
        meal_id: EntityId, payload: MealUpdate, request: Request
    ) -> MealRecord:
        """Update a meal's name, date or time."""
        state_container: AppContainer = request.app.state.container
        return state_container.meal_service.update_meal(
            meal_id, name=payload.name, day=payload.date, time=payload.time
        )

    @app.delete("/api/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_meal(meal_id: EntityId, request: Request) -> Response:
        """Delete a meal and its items."""
        state_container: AppContainer = request.app.state.container
        if not state_container.meal_service.delete_meal(meal_id):
            raise errors.NotFoundError("Meal", meal_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/api/meal-items", status_code=status.HTTP_201_CREATED)
    def create_meal_item(
        payload: MealItemCreate, request: Request
    ) -> MealItemRecord:
        """Add a food to a meal."""
        state_container: AppContainer = request.app.state.container
        return state_container.meal_service.add_item(
            payload.meal_id, payload.food_item_id, payload.quantity
        )

    @app.patch("/api/meal-items/{meal_item_id}")
    def update_meal_item(
        meal_item_id: EntityId, payload: MealItemUpdate, request: Request
    ) -> MealItemRecord:
        """Change a meal item's quantity."""
        state_container: AppContainer = request.app.state.container
        return state_container.meal_service.update_item_quantity(
            meal_item_id, payload.quantity
        )

    @app.delete(
        "/api/meal-items/{meal_item_id}", status_code=status.HTTP_204_NO_CONTENT
    )
    def delete_meal_item(meal_item_id: EntityId, request: Request) -> Response:
        """Remove a meal item."""
        state_container: AppContainer = request.app.state.container
        if not state_container.meal_service.delete_item(meal_item_id):
            raise errors.NotFoundError("MealItem", meal_item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/api/users/{user_id}/log", status_code=status.HTTP_201_CREATED)
    def log_food(
        user_id: EntityId, payload: QuickLogPayload, request: Request
    ) -> MealItemRecord:
        """Log a food on a day, creating a default meal for an empty day."""
        state_container: AppContainer = request.app.state.container
        return state_container.meal_service.log_food(
            user_id,
            payload.date,
            payload.food_item_id,
            payload.quantity,
            meal_id=payload.meal_id,
        )

    @app.get("/api/users/{user_id}/daily")
    def daily_data(
        user_id: EntityId,
        request: Request,
        day: date | None = Query(default=None, alias="date"),
    ) -> DailyData:
        """Return meals, totals and targets for a day."""
        state_container: AppContainer = request.app.state.container
        return state_container.daily_log_service.get_daily_data(
            user_id, day or date.today()
        )

    @app.get("/api/users/{user_id}/daily/export", response_class=HTMLResponse)
    def export_daily(
        user_id: EntityId,
        request: Request,
        day: date | None = Query(default=None, alias="date"),
    ) -> HTMLResponse:
        """Return the day's nutrition report as an HTML document."""
        state_container: AppContainer = request.app.state.container
        data = state_container.daily_log_service.get_daily_data(
            user_id, day or date.today()
        )
        filename = f"nutrition-report-{data.date.isoformat()}.html"
        return HTMLResponse(
            render_daily_report(data),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/api/users/{user_id}/weekly")
    def weekly_data(
        user_id: EntityId,
        request: Request,
        end_day: date | None = Query(default=None, alias="endDate"),
    ) -> WeeklyData:
        """Return seven days of calories ending on a day."""
        state_container: AppContainer = request.app.state.container
        return state_container.stats_service.get_weekly_data(
            user_id, end_day or date.today()
        )

    return app


def _format_request_errors(exc: RequestValidationError) -> str:
    """Flatten request validation errors into one message."""
    parts = []
    for error in exc.errors():
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part != "body"
        )
        message = error.get("msg")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(str(part) for part in parts) or "Invalid request"
