from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tactical_analysis.route import router as analysis_router

app = FastAPI(
    title="Tactical Analysis API",
    description="API for identity-guarded tactical analysis of football match videos",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(analysis_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "message": "Tactical Analysis API",
        "docs": "/docs",
        "health": "ok"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
