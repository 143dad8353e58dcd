# main.py
import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
import uvicorn

from exceptions import ServiceError
from routers import auth, payments, student_payments

# Load .env
load_dotenv()

logging.basicConfig(
     level=os.getenv("LOG_LEVEL", "INFO").upper(),
     format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# App instance
app = FastAPI(title="Math Academy Portal API")

# CORS
origins = [origin for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin]
app.add_middleware(
     CORSMiddleware,
     allow_origins=origins,
     allow_credentials=True,
     allow_methods=["*"],
     allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
     if exc.status_code >= 500:
          logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
     return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
     issues = [
          {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
          for err in exc.errors()
     ]
     return JSONResponse(status_code=400, content={"error": "Validation failed", "issues": issues})


@app.get("/health")
def health():
     return {"status": "ok"}


app.include_router(auth.router)
app.include_router(student_payments.router)
app.include_router(payments.router)


if __name__ == "__main__":
     port = int(os.getenv("PORT", 10000))
     uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
