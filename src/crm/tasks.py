"""
Celery task pushing one course to Salesforce.
"""

from loguru import logger

from src.crm.sync import build_course_sync
from src.tasks.worker import celery_app


@celery_app.task(bind=True, max_retries=0)
def push_course_to_salesforce(self, course_slug: str):
    """
    Load a course from the tracker and push it to Salesforce.

    Args:
        course_slug: Slug of the course to push

    Returns:
        dict: Result of the operation
    """
    sync = build_course_sync()
    try:
        logger.info(f"Pushing course {course_slug} to Salesforce")
        result = sync.push_slug(course_slug)
    except Exception as e:
        logger.exception(
            f"Error pushing course {course_slug} to Salesforce: {str(e)}"
        )
        raise
    finally:
        sync.client.close()
        sync.store.close()

    if result is None:
        return {"success": True, "status": "disabled", "course": course_slug}

    logger.info(f"Course {course_slug} sync finished with status: {result.status}")
    return {
        "success": result.has_result,
        "status": result.status,
        "course": course_slug,
        "salesforce_id": result.salesforce_id,
    }


__all__ = ["push_course_to_salesforce"]
