import logging
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from backend.config import CORS_ORIGINS, HOST, PORT, RESET_DATABASE, SEED_TEST_DATA
from backend.database import create_tables, delete_tables, engine
from backend.init_test_data import init_all_test_data
from backend.router.city import router as city_router
from backend.router.country import router as country_router
import backend.models  # noqa: F401  registers all tables on Model.metadata




logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if RESET_DATABASE:
        await delete_tables()
        logger.info("База очищена")
    await create_tables()
    logger.info("База готова к работе")
    if SEED_TEST_DATA:
        await init_all_test_data()
    yield
    await engine.dispose()
    logger.info("Выключение")


def create_app() -> FastAPI:
    app = FastAPI(
        title="WorldCities API",
        version="1.0.0",
        description="City/country reference database",
        lifespan=lifespan,
    )
    
    app.include_router(city_router)
    app.include_router(country_router)
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "backend.main:app",
        reload=True,
        port=PORT,
        host=HOST
    )
