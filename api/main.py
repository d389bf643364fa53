from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.graph_router import router as graph_router
from api.editor_router import router as editor_router
from core.config import settings

app = FastAPI(
    title="Situation Graph Editor API",
    description="Assembles situation triples from form input and keeps a graph model in sync with the text.",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include all the Routers ---
app.include_router(graph_router)
app.include_router(editor_router)

@app.get("/")
def read_root():
    return {"message": "Situation Graph Editor API is running."}
