from mapty.core import Mapty


def run(assume_yes: bool = False) -> None:
    with Mapty() as app:
        count = len(app.store.load())
        if not assume_yes:
            confirm = input(f"This will delete ALL {count} activities. Are you sure? (yes/no): ")
            if confirm.lower() != "yes":
                print("Reset cancelled.")
                return

        if not app.store.reset_all():
            print("Reset failed: stored activities could not be deleted.")
            return
        print(f"Reset complete! Activities deleted: {count}")
