from onboarding.config.settings import Settings
from onboarding.database.connection import close_pool
from onboarding.logging.logger import Log
from onboarding.service import OnboardingService, build_onboarding_service

PROMPT = "> "
QUIT_COMMANDS = frozenset({"quit", "exit"})


def chat(service: OnboardingService) -> None:
    """Console conversation against one fresh session."""
    session = service.create_session()
    print(f"Session {session.session_id}. Type 'quit' to stop, 'progress' for status.")
    while True:
        try:
            line = input(PROMPT).strip()
        except EOFError:
            break
        if not line:
            continue
        if line.lower() in QUIT_COMMANDS:
            break
        if line.lower() == "progress":
            progress = service.get_progress(session.session_id)
            print(
                f"[{progress.current_step.value}] {progress.percent_complete}% complete, "
                f"{progress.documents_uploaded}/{progress.documents_required} documents"
            )
            continue
        reply = service.send_message(session.session_id, line)
        print(reply.reply)
        if reply.suggested_actions:
            print("  " + " | ".join(reply.suggested_actions))


def main() -> None:
    """Entry point: load settings -> build the service -> run a console chat."""
    settings = Settings()
    Log.configure(settings.log_level)
    try:
        chat(build_onboarding_service(settings))
    finally:
        close_pool()


if __name__ == "__main__":
    main()
