import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.core import config
from backend.core.errors import UserDirectoryError
from backend.directory import create_seeded_directory
from backend.routes import user_routes

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_methods=config.CORS_ALLOW_METHODS,
    allow_headers=config.CORS_ALLOW_HEADERS,
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_directory() -> None:
    config.validate_runtime_config()
    logging.getLogger('backend').setLevel(config.LOG_LEVEL)

    app.state.user_directory = create_seeded_directory()
    logger.info('User directory seeded with %s users.', len(app.state.user_directory))


@app.exception_handler(UserDirectoryError)
async def handle_user_directory_error(request: Request, exc: UserDirectoryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = '; '.join(str(detail.get('msg', '')) for detail in exc.errors()) or 'Invalid request'
    logger.warning('Rejected request body on %s %s: %s', request.method, request.url.path, error)
    return JSONResponse(
        status_code=500,
        content={'message': 'Something went wrong!', 'error': error},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={'message': 'Something went wrong!', 'error': str(exc)},
    )


@app.get('/')
def root():
    users_path = config.API_USERS_PREFIX
    return {
        'message': 'Welcome to Users API',
        'version': config.APP_VERSION,
        'endpoints': {
            'getAllUsers': users_path,
            'getUserById': f'{users_path}/:id',
            'createUser': users_path,
            'updateUser': f'{users_path}/:id',
            'deleteUser': f'{users_path}/:id',
        },
    }


app.include_router(user_routes.router, prefix=config.API_USERS_PREFIX)
