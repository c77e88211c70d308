from __future__ import annotations

import asyncio
import json
import logging
from typing import List, Optional, Tuple

from aiohttp import web
from pydantic import BaseModel, Field, StrictInt, ValidationError

from course_schedule.graph.cycle_detector import CourseScheduleDetector, detect
from course_schedule.graph.prerequisites import InvalidPrerequisiteError
from course_schedule.utils.config import Settings, settings

log = logging.getLogger(__name__)


class ScheduleRequest(BaseModel):
    num_courses: StrictInt = Field(ge=0)
    prerequisites: List[Tuple[StrictInt, StrictInt]] = Field(default_factory=list)


def json_error(exc_cls, error: str, detail=None, **exc_kwargs) -> web.HTTPException:
    body = {"ok": False, "error": error}
    if detail is not None:
        body["detail"] = detail
    return exc_cls(text=json.dumps(body), content_type="application/json", **exc_kwargs)


async def create_app(cfg: Optional[Settings] = None) -> web.Application:
    cfg = cfg or settings
    app = web.Application(client_max_size=cfg.max_body_bytes)

    def too_large(request: web.Request) -> web.HTTPException:
        return json_error(
            web.HTTPRequestEntityTooLarge,
            "too_large",
            detail={
                "max_body_bytes": cfg.max_body_bytes,
                "max_courses": cfg.max_courses,
                "max_prerequisites": cfg.max_prerequisites,
            },
            max_size=cfg.max_body_bytes,
            actual_size=request.content_length or 0,
        )

    async def parse_request(request: web.Request) -> ScheduleRequest:
        try:
            body = await request.json()
        except web.HTTPRequestEntityTooLarge:
            raise too_large(request)
        except ValueError:
            # JSONDecodeError and UnicodeDecodeError
            raise json_error(web.HTTPBadRequest, "invalid_json")
        try:
            req = ScheduleRequest.model_validate(body)
        except ValidationError as e:
            detail = e.errors(include_url=False, include_context=False, include_input=False)
            raise json_error(web.HTTPBadRequest, "invalid_request", detail=detail)

        if req.num_courses > cfg.max_courses or len(req.prerequisites) > cfg.max_prerequisites:
            raise too_large(request)
        return req

    async def run_detector(request: web.Request) -> CourseScheduleDetector:
        req = await parse_request(request)
        loop = asyncio.get_running_loop()
        try:
            # CPU-bound, run off the event loop
            detector = await loop.run_in_executor(None, detect, req.num_courses, req.prerequisites)
        except InvalidPrerequisiteError as e:
            raise json_error(web.HTTPBadRequest, "invalid_prerequisite", detail=str(e))

        log.info(
            "SCHEDULE: num_courses=%s prerequisites=%s cycle=%s stats=%s",
            req.num_courses,
            len(req.prerequisites),
            detector.last_cycle,
            detector.stats(),
        )
        return detector

    # -----------------------
    # Basic
    # -----------------------
    async def health(_: web.Request) -> web.Response:
        return web.json_response({"ok": True, "app_env": cfg.app_env})

    # -----------------------
    # Schedule
    # -----------------------
    async def schedule_can_finish(request: web.Request) -> web.Response:
        detector = await run_detector(request)
        return web.json_response({"ok": True, "can_finish": detector.last_cycle is None})

    async def schedule_cycle(request: web.Request) -> web.Response:
        detector = await run_detector(request)
        return web.json_response({"ok": True, "cycle": detector.last_cycle})

    # Routes
    app.router.add_get("/health", health)

    app.router.add_post("/schedule/can_finish", schedule_can_finish)
    app.router.add_post("/schedule/cycle", schedule_cycle)

    return app


def main() -> None:
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    web.run_app(create_app(), host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    main()
