"""
View Service
Unconditional view counter
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models import ActionResult
from src.infrastructure.repositories import VideoRepository
from src.services.base_service import BaseService
from src.services.exceptions import ResourceNotFoundError


class ViewService(BaseService):
    """
    Counts every call as a view

    No viewer identity and no deduplication: correctness under concurrency
    rests on the single UPDATE views = views + 1 statement.
    """

    def __init__(self, session: AsyncSession, config=None):
        super().__init__(session, config=config)
        self.video_repo = VideoRepository(session)

    def get_service_name(self) -> str:
        return "view"

    async def increment_view(self, video_id: str) -> ActionResult:
        """
        Add one view to a video

        Raises:
            ResourceNotFoundError: video missing
            DatabaseError: store failure
        """
        self.log_debug(f"Incrementing view for video: {video_id}")
        try:
            updated = await self.video_repo.increment_counter(video_id, "views")
            if not updated:
                raise ResourceNotFoundError("Video", video_id)
            await self.session.commit()
            views = await self.video_repo.get_column(video_id, "views")
        except Exception as e:
            await self.session.rollback()
            raise self.handle_error(e, "increment_view", {"video_id": video_id})

        return ActionResult(message="View counted", views=int(views or 0))
