"""APScheduler configuration for scheduled lead enrichment."""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
import logging

from leadcrm.config import settings
from leadcrm.services.enrichment_engine import EnrichmentJobManager, StartStatus

logger = logging.getLogger(__name__)

# Create scheduler instance
scheduler = AsyncIOScheduler()


async def run_scheduled_enrichment(manager: EnrichmentJobManager):
    """
    Start a default-size enrichment batch.
    Called by APScheduler; skips quietly when a batch is already running.
    """
    try:
        result = await manager.start()

        if result.status == StartStatus.ALREADY_RUNNING:
            logger.info("Scheduled enrichment skipped: batch already running")
        elif result.status == StartStatus.NO_LEADS:
            logger.info("Scheduled enrichment: all leads are enriched")
        else:
            logger.info(f"Scheduled enrichment started for {result.leads_claimed} leads")

    except Exception as e:
        logger.error(f"Error starting scheduled enrichment: {e}")


def start_scheduler(manager: EnrichmentJobManager):
    """
    Initialize and start the APScheduler.

    Jobs:
    - Lead enrichment batch: ENRICHMENT_SCHEDULE (crontab, default every 30 min)
    """
    if not settings.ENABLE_SCHEDULED_ENRICHMENT:
        logger.info("Scheduled enrichment disabled")
        return

    if scheduler.running:
        logger.info("Scheduler already running")
        return

    try:
        scheduler.add_job(
            run_scheduled_enrichment,
            trigger=CronTrigger.from_crontab(settings.ENRICHMENT_SCHEDULE),
            args=[manager],
            id='lead_enrichment_batch',
            name='Lead Enrichment Batch',
            replace_existing=True,
            max_instances=1
        )
        logger.info(f"✅ Scheduled: Lead Enrichment Batch ({settings.ENRICHMENT_SCHEDULE})")

        scheduler.start()
        logger.info("✅ APScheduler started successfully!")

        for job in scheduler.get_jobs():
            logger.info(f"   • {job.name}: Next run at {job.next_run_time}")

    except Exception as e:
        logger.error(f"❌ Error starting scheduler: {e}")


def stop_scheduler():
    """Stop the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown()
