from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from favicon_api.config import API_HOST, API_PORT, APP_NAME, LOG_FORMAT, LOG_LEVEL
from favicon_api.models import WelcomeMessage
from favicon_api.routes import icons
import logging

app = FastAPI(title=APP_NAME)

# Setup logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_model=WelcomeMessage)
async def read_root():
    return {"message": f"Welcome to the {APP_NAME} API! Request /[website]/[size]."}


# Include routers
app.include_router(icons.router)


# Log requests and responses
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response: {response.status_code}")
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("favicon_api.main:app", host=API_HOST, port=API_PORT)
