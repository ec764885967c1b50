from fastapi import FastAPI
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.errors import DatabaseError
from app.core.logging import get_logger
from app.db.session import check_connection, create_db_and_tables
from app.models.entity import ENTITIES

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # A database that is down at startup is logged; requests then fail one by one
    if check_connection() and settings.CREATE_TABLES:
        try:
            create_db_and_tables()
        except DatabaseError as e:
            logger.error(f"Error creating tables: {e}")
    logger.info(f"{settings.PROJECT_NAME} ready, serving {', '.join(ENTITIES)}")
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
    description="Generic CRUD API over the catalog database"
)

@app.get("/")
def read_root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}. Visit /docs for Swagger UI."}

from app.routers import cart, images
from app.routers.factory import build_entity_router

app.include_router(cart.router, prefix="/carts", tags=["carts"])
app.include_router(images.router, prefix="/images", tags=["images"])
for route, entity in ENTITIES.items():
    app.include_router(build_entity_router(entity), prefix=f"/{route}", tags=[route])

# Add CORS
from fastapi.middleware.cors import CORSMiddleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
