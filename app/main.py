import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from app.db import DB_NAME, MONGO_URL, connect_to_mongo, close_mongo_connection
from routes.crs import router as crs_router
from routes.profiles import router as profiles_router

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

app = FastAPI(
    title="CRS Compare",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
    openapi_url="/api/v1/openapi.json"
)

app.include_router(crs_router, prefix="/api/v1")
app.include_router(profiles_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    mongo_url = os.getenv("MONGO_URL", MONGO_URL)
    app.state.db_name = os.getenv("DB_NAME", DB_NAME)
    connect_to_mongo(app, mongo_url)

@app.on_event("shutdown")
async def shutdown_event():
    close_mongo_connection(app)

@app.get("/health")
async def health():
    return {"status": "ok"}
