from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import infra.database.connection as db_connection
from api.routers import (
    albums,
    attachments,
    catalog,
    songs,
    versions,
)

from config import settings

# Lifespan event to handle startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    db_connection.init_db()  # Raw SQLによるテーブル作成
    yield
    db_connection.close_db()

app = FastAPI(title="Albumer Backend API", lifespan=lifespan)

# CORS Configuration
origins = [
    f"http://localhost:{settings.FRONTEND_PORT}",  # Frontend Dev Server
    f"http://127.0.0.1:{settings.FRONTEND_PORT}",  # Frontend Dev Server (IP)
    f"http://localhost:{settings.ALBUMER_PORT}",   # Dynamic Port
    f"http://127.0.0.1:{settings.ALBUMER_PORT}",   # Dynamic Port
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Root endpoint for health check
@app.get("/")
async def root():
    return {"message": "Albumer Backend API is running"}

# Include Routers
app.include_router(albums.router)
app.include_router(attachments.router)
app.include_router(catalog.router)
app.include_router(songs.router)
app.include_router(versions.router)
