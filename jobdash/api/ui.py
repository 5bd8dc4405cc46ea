import os
from fastapi import APIRouter
from fastapi.responses import FileResponse

UI_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "ui"))

router = APIRouter()


# Serve index.html at root
@router.get("/", include_in_schema=False)
def index():
    return FileResponse(os.path.join(UI_DIR, "index.html"))
