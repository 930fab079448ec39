import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel
from starlette.datastructures import UploadFile

from certificate_generator import generate_certificate
from file_store import (
    FileStore,
    FileStoreError,
    InvalidFilenameError,
    check_batch_size,
    check_size,
    client_filename,
    guess_mime_type,
    safe_stem,
    unique_name,
)
from settings import Settings

REQUIRED_FIELDS = ("name", "course", "instructor", "date")
CACHE_CONTROL = "public, max-age=3600"


# ======================
# Models
# ======================
class CertificateRequest(BaseModel):
    # Required fields are checked by missing_fields()
    name: Optional[str] = None
    course: Optional[str] = None
    instructor: Optional[str] = None
    date: Optional[str] = None
    template: Optional[str] = None


def missing_fields(data: CertificateRequest):
    return [field for field in REQUIRED_FIELDS if not getattr(data, field)]


def certificate_filename(name: str) -> str:
    return f"certificate_{safe_stem(name, 'recipient')}_{int(time.time() * 1000)}.png"


def base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


def error(message: str, status_code: int, **extra) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


async def serve_file(store: FileStore, filename: str, not_found: str, media_type=None):
    try:
        path = store.path_for(filename)
    except InvalidFilenameError as e:
        return error(str(e), 400)
    if not await asyncio.to_thread(path.is_file):
        return error(not_found, 404)

    mime_type = media_type or guess_mime_type(filename)
    # Non-ASCII names are sent as filename*=utf-8''...
    return FileResponse(
        path,
        media_type=mime_type,
        filename=filename,
        content_disposition_type="inline" if mime_type.startswith("image/") else "attachment",
        headers={"Cache-Control": CACHE_CONTROL},
    )


# ======================
# Application
# ======================
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    uploads = FileStore(settings.uploads_dir)
    templates = FileStore(settings.certificates_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        available = templates.list_png()
        if available:
            logging.info(f"🚀 Certificate service started. Templates: {', '.join(available)}")
        else:
            logging.warning(f"⚠️ No templates found in {settings.certificates_dir}")
        yield

    app = FastAPI(title="Certificate Service", lifespan=lifespan)
    app.state.settings = settings

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return error("Invalid request body", 400, details=jsonable_encoder(exc.errors()))

    @app.get("/")
    async def index():
        return PlainTextResponse("Certificate service is running")

    # --- certificates ---

    @app.post("/generate")
    async def generate(body: CertificateRequest, request: Request):
        missing = missing_fields(body)
        if missing:
            return error(f"Missing required fields: {', '.join(missing)}", 400)

        try:
            available = await asyncio.to_thread(templates.list_png)
            template_name = body.template or (available[0] if available else None)
            if not template_name:
                return error("No certificate templates available", 404)

            try:
                found = templates.exists(template_name)
            except InvalidFilenameError as e:
                return error(str(e), 400)
            if not found:
                return error(
                    f"Template {template_name} not found. "
                    f"Available templates: {', '.join(available)}",
                    404,
                )

            png_bytes = await asyncio.to_thread(
                generate_certificate,
                templates.path_for(template_name),
                body,
                settings.fonts_dir,
            )
            filename = certificate_filename(body.name)
            meta = await asyncio.to_thread(uploads.save, filename, png_bytes)

            logging.info(f"🎉 Generated {filename} from template {template_name}")
            return {
                "message": "Certificate generated successfully",
                "file": {
                    "name": filename,
                    "size": meta["size"],
                    "type": "image/png",
                    "url": f"{base_url(request)}/files/{filename}",
                    "template": template_name,
                    "data": body.model_dump(exclude_none=True),
                },
            }
        except Exception as e:
            logging.error(f"❌ Certificate generation error: {e}")
            return error("Failed to generate certificate", 500, details=str(e))

    @app.get("/templates")
    async def list_templates():
        try:
            available = await asyncio.to_thread(templates.list_png)
        except Exception as e:
            logging.error(f"Template listing error: {e}")
            return error("Failed to list templates", 500)
        return {
            "templates": [{"name": name, "url": f"/certificates/{name}"} for name in available],
            "count": len(available),
        }

    @app.get("/certificates/{filename:path}")
    async def serve_template(filename: str):
        try:
            return await serve_file(templates, filename, "Template not found", media_type="image/png")
        except Exception as e:
            logging.error(f"Template serving error: {e}")
            return error("Failed to serve template", 500)

    # --- uploads ---

    async def save_single(item: UploadFile, request: Request):
        content = await item.read()
        try:
            name = client_filename(item.filename)
            check_size(name, len(content), settings.max_file_size)
        except FileStoreError as e:
            return error(str(e), 400)

        # Same-named uploads overwrite each other on this path
        meta = await asyncio.to_thread(uploads.save, name, content)
        meta["type"] = item.content_type or meta["type"]
        meta["url"] = f"{base_url(request)}/files/{name}"
        logging.info(f"📥 Uploaded {name} ({meta['size']} bytes)")
        return {"message": "File uploaded successfully", "file": meta, "count": 1}

    async def save_batch(items, request: Request):
        received = []
        total = 0
        try:
            for item in items:
                content = await item.read()
                check_size(item.filename or "unnamed", len(content), settings.max_file_size)
                total += len(content)
                received.append((item, content))
            check_batch_size(total, settings.max_batch_size)
        except FileStoreError as e:
            return error(str(e), 400)

        saved = []
        for item, content in received:
            try:
                original = client_filename(item.filename)
                name = unique_name(original)
                meta = await asyncio.to_thread(uploads.save, name, content)
            except (FileStoreError, OSError) as e:
                logging.warning(f"⚠️ Skipping upload {item.filename!r}: {e}")
                continue
            meta["originalName"] = original
            meta["type"] = item.content_type or meta["type"]
            meta["url"] = f"{base_url(request)}/files/{name}"
            saved.append(meta)

        if not saved:
            return error("Failed to process upload", 500, details="No files could be saved")

        logging.info(f"📥 Uploaded {len(saved)} of {len(received)} files")
        return {
            "message": f"{len(saved)} files uploaded successfully",
            "files": saved,
            "count": len(saved),
        }

    @app.post("/upload")
    async def upload(request: Request):
        try:
            form = await request.form()
            items = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]
            if not items:
                return error("No file provided", 400)
            if len(items) == 1:
                return await save_single(items[0], request)
            return await save_batch(items, request)
        except Exception as e:
            logging.error(f"Upload error: {e}")
            return error("Failed to process upload", 500)

    @app.get("/files")
    async def list_files():
        try:
            if not uploads.directory_exists():
                return {"files": [], "message": "No uploads directory found"}
            files = [
                {
                    "name": meta["name"],
                    "size": meta["size"],
                    "lastModified": meta["lastModified"],
                    "url": f"/files/{meta['name']}",
                }
                for meta in await asyncio.to_thread(uploads.list)
            ]
        except Exception as e:
            logging.error(f"File listing error: {e}")
            return error("Failed to list files", 500)
        return {"files": files, "count": len(files)}

    @app.get("/files/{filename:path}")
    async def serve_upload(filename: str):
        try:
            return await serve_file(uploads, filename, "File not found")
        except Exception as e:
            logging.error(f"File serving error: {e}")
            return error("Failed to serve file", 500)

    return app


app = create_app()

if __name__ == "__main__":
    settings = app.state.settings
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)
