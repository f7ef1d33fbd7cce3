# catalog_app/main.py
import json
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import config

logger = logging.getLogger("catalog_browser.server")

# Static host for the catalog document and its images. The browser never
# writes back; the cart lives only on the client.

def create_app(data_file: Optional[str] = None, assets_dir: Optional[str] = None) -> FastAPI:
    data_path = Path(data_file or config.DATA_FILE)
    assets_path = Path(assets_dir or config.ASSETS_DIR)

    app = FastAPI(title="catalog-browser data host")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Catalog document
    # ---------------------------
    @app.get("/items.json")
    def items():
        if not data_path.exists():
            raise HTTPException(status_code=404, detail="catalog not found")
        try:
            data = json.loads(data_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error("Bad catalog file %s: %s", data_path, e)
            raise HTTPException(status_code=500, detail="catalog file is not valid JSON")
        # served as-is; shape is checked by the client
        return JSONResponse(content=data, headers={"Cache-Control": "no-store"})

    @app.get("/health")
    async def health():
        return {"status": "ok", "catalog": data_path.exists()}

    if assets_path.is_dir():
        app.mount("/assets", StaticFiles(directory=str(assets_path)), name="assets")

    return app


app = create_app()


def serve(host: str = "127.0.0.1", port: int = 8085):
    import uvicorn
    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    serve()
