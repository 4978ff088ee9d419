"""User account actions: password change and email verification."""

import falcon.asgi

from backoffice.application.use_cases.user.change_password import ChangePasswordUseCase
from backoffice.application.use_cases.user.verify_email import VerifyEmailUseCase
from backoffice.interfaces.api.request_context import require_request_info
from backoffice.interfaces.api.schemas import PasswordChangeBody
from backoffice.interfaces.api.serializers import serialize


class UserAccountResource:
    """POST /v1/users/{id}/password and POST /v1/users/{id}/verify-email."""

    def __init__(
        self, change_password: ChangePasswordUseCase, verify_email: VerifyEmailUseCase
    ) -> None:
        self._change_password = change_password
        self._verify_email = verify_email

    async def on_post_password(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = PasswordChangeBody.model_validate(await req.get_media())
        await self._change_password.execute(item_id, body.password, info)
        resp.status = falcon.HTTP_204

    async def on_post_verify_email(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        resp.media = serialize(await self._verify_email.execute(item_id, info))
