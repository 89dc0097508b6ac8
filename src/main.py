import argparse
import sys


def main(argv=None):
    # Import modules inside function to avoid import issues
    from src.crm.sync import build_course_sync
    from src.settings import app_settings
    from src.util.logging import setup_logging
    from src.util.sentry import init as init_sentry

    parser = argparse.ArgumentParser(
        description="Push a tracker course to Salesforce"
    )
    parser.add_argument("slug", help="Slug of the course to push")
    parser.add_argument(
        "--log-to-file", action="store_true", help="Also write logs to data_dir/logs"
    )
    args = parser.parse_args(argv)

    logger = setup_logging(
        log_level="DEBUG" if app_settings.debug else "INFO",
        json_logs=False,
        log_to_file=args.log_to_file,
    )
    init_sentry()

    sync = build_course_sync()
    try:
        result = sync.push_slug(args.slug)
    except Exception:
        logger.exception(f"Failed to push course {args.slug} to Salesforce")
        return 1
    finally:
        sync.client.close()
        sync.store.close()

    if result is None:
        logger.warning("Salesforce sync is disabled (SALESFORCE_SYNC_ENABLED)")
        return 0
    logger.info(
        f"Course {args.slug}: {result.status} (Salesforce id: {result.salesforce_id})"
    )
    return 0 if result.has_result else 2


if __name__ == "__main__":
    sys.exit(main())
