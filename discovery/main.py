import threading

from discovery.config.settings import Settings
from discovery.database.connection import close_pool, init_pool
from discovery.events.models import SearchCancelledEvent, SearchCompleteEvent
from discovery.logging.logger import Log
from discovery.service import build_service, default_criteria


def main() -> None:
    """Entry point: initialize pool -> build service -> run one size pass and report it."""
    settings = Settings()
    Log.configure(settings.log_level)
    uses_database = settings.corpus_backend.lower() == "postgres"
    if uses_database:
        init_pool(settings)

    try:
        service = build_service(settings)
        finished = threading.Event()

        def on_complete(event: SearchCompleteEvent) -> None:
            for key, count in event.group_sizes.items():
                Log.info(f"{key.name}: {count}")
            finished.set()

        def on_cancelled(event: SearchCancelledEvent) -> None:
            Log.warning("Search did not complete")
            finished.set()

        service.bus.subscribe(SearchCompleteEvent, on_complete)
        service.bus.subscribe(SearchCancelledEvent, on_cancelled)

        handle = service.start_size_pass(default_criteria(settings))
        try:
            finished.wait()
        except KeyboardInterrupt:
            Log.info("Interrupted, cancelling search")
            service.cancel(handle)
            handle.join()
    finally:
        if uses_database:
            close_pool()


if __name__ == "__main__":
    main()
