"""Block until Postgres accepts connections."""
import time
import psycopg2
from shared.core import get_logger, setup_logging
from outbound_shipments.core_settings import get_settings

logger = get_logger(__name__)

def wait(max_attempts: int = 30, delay: float = 1.0) -> bool:
    settings = get_settings()
    for attempt in range(1, max_attempts + 1):
        try:
            conn = psycopg2.connect(
                dbname=settings.POSTGRES_DB,
                user=settings.POSTGRES_USER,
                password=settings.POSTGRES_PASSWORD,
                host=settings.POSTGRES_HOST,
                port=settings.POSTGRES_PORT,
            )
            conn.close()
            logger.info(f"Database ready after {attempt} attempt(s).")
            return True
        except psycopg2.OperationalError as e:
            logger.warning(f"DB not ready (attempt {attempt}): {e}")
            time.sleep(delay)
    raise SystemExit("Database not ready after max attempts")

if __name__ == "__main__":
    setup_logging(service_name="outbound-shipments-wait-for-db", level=get_settings().LOG_LEVEL)
    wait()
