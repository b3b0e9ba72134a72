"""Application entry point and composition root."""

import logging

import falcon
import falcon.asgi

from rdsguard import __version__
from rdsguard.application.use_cases.referral import ValidateReferralCodeUseCase
from rdsguard.application.use_cases.seed import CreateSeedUseCase, ListSeedsUseCase
from rdsguard.application.use_cases.survey import (
    CreateSurveyUseCase,
    DeleteSurveyUseCase,
    GetSurveyUseCase,
    ListSurveysUseCase,
    UpdateSurveyUseCase,
)
from rdsguard.application.use_cases.user import (
    ApproveUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    PreapproveUserUseCase,
    UpdateUserUseCase,
)
from rdsguard.config import Settings, get_settings
from rdsguard.domain.exceptions import RdsGuardError
from rdsguard.infrastructure.auth import KeycloakProvider
from rdsguard.infrastructure.permission import ActorLoader
from rdsguard.infrastructure.persistence.postgres import create_pool, create_uow_factory
from rdsguard.interfaces.api.middleware import (
    AuthMiddleware,
    CORSMiddleware,
    PoolLifespanMiddleware,
)
from rdsguard.interfaces.api.resources.health import HealthResource
from rdsguard.interfaces.api.resources.referral_codes import ReferralCodeResource
from rdsguard.interfaces.api.resources.seeds import SeedsResource
from rdsguard.interfaces.api.resources.surveys import SurveyResource, SurveysResource
from rdsguard.interfaces.api.resources.users import (
    UserApprovalResource,
    UserResource,
    UsersResource,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


async def handle_domain_error(req, resp, ex: RdsGuardError, params) -> None:
    """Render a domain error with its stable code and status."""
    if ex.status >= 500:
        logger.error("%s on %s %s: %s", ex.code, req.method, req.path, ex)
    resp.status = falcon.code_to_http_status(ex.status)
    resp.media = ex.to_dict()


async def log_exception(req, resp, ex: Exception, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"code": "INTERNAL_ERROR", "message": "Internal server error", "status": 500}


def build_app(
    uow_factory,
    settings: Settings,
    *,
    middleware: list | None = None,
) -> falcon.asgi.App:
    """Wire use cases and resources onto an app with the given middleware."""
    policy = settings.code_policy()

    surveys_resource = SurveysResource(
        CreateSurveyUseCase(uow_factory, code_policy=policy),
        ListSurveysUseCase(uow_factory),
    )
    survey_resource = SurveyResource(
        GetSurveyUseCase(uow_factory),
        UpdateSurveyUseCase(uow_factory),
        DeleteSurveyUseCase(uow_factory),
    )
    seeds_resource = SeedsResource(
        CreateSeedUseCase(uow_factory, code_policy=policy),
        ListSeedsUseCase(uow_factory),
    )
    referral_code_resource = ReferralCodeResource(
        ValidateReferralCodeUseCase(uow_factory, code_policy=policy)
    )
    users_resource = UsersResource(
        ListUsersUseCase(uow_factory),
        PreapproveUserUseCase(uow_factory),
    )
    user_resource = UserResource(
        GetUserUseCase(uow_factory),
        UpdateUserUseCase(uow_factory),
    )
    user_approval_resource = UserApprovalResource(ApproveUserUseCase(uow_factory))

    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, log_exception)
    app.add_error_handler(RdsGuardError, handle_domain_error)
    app.add_route("/v1/health", HealthResource())
    app.add_route("/v1/surveys", surveys_resource)
    app.add_route("/v1/surveys/{survey_id}", survey_resource)
    app.add_route("/v1/seeds", seeds_resource)
    app.add_route("/v1/referral-codes/{code}", referral_code_resource)
    app.add_route("/v1/users", users_resource)
    app.add_route("/v1/users/{user_id}", user_resource)
    app.add_route("/v1/users/{user_id}/approval", user_approval_resource)
    return app


def create_rdsguard_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set, all requests are anonymous")
    actor_loader = ActorLoader(uow_factory, settings.default_timezone)

    logger.info("Starting rdsguard v%s (%s)", __version__, settings.environment)
    return build_app(
        uow_factory,
        settings,
        middleware=[
            CORSMiddleware(settings.cors_origin_list()),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak, actor_loader),
        ],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_rdsguard_app(), host="0.0.0.0", port=8000)
