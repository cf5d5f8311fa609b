"""
Main App File
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from glacier_gateway.core.errors import GatewayError
from glacier_gateway.log import configure_logging
from glacier_gateway.routes import archives, configs, descriptions, jobs, vaults

configure_logging()

app = FastAPI(title="Glacier Gateway")

app.include_router(configs.router, prefix="/configs", tags=["configs"])
app.include_router(vaults.router, tags=["vaults"])
app.include_router(archives.router, tags=["archives"])
app.include_router(jobs.router, tags=["jobs"])
app.include_router(descriptions.router, tags=["descriptions"])

@app.exception_handler(GatewayError)
def handle_gateway_error(request: Request, exc: GatewayError):
    return JSONResponse(
        status_code=exc.status_code,
        content={'detail': exc.message, 'code': exc.code},
    )

def run():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
