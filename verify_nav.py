from keepcheck import HarnessError, Settings, View, ViewNavigator, capture_screenshot, configure_logging, open_session


def verify_nav():
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    with open_session(settings) as session:
        navigator = ViewNavigator(session)
        try:
            # Open the archive, then come back to the notes list
            navigator.go_to(View.ARCHIVE)
            archive_ok = navigator.arrived(View.ARCHIVE)
            capture_screenshot(session, "archive_view")

            navigator.go_to(View.MAIN)
            main_ok = navigator.arrived(View.MAIN)
            capture_screenshot(session, "main_view")

            if archive_ok and main_ok and session.current_view is View.MAIN:
                print("Test passed: navigation reached the archive and returned to the notes list.")
            else:
                print(f"Test failed: archive reached: {archive_ok}, notes list restored: {main_ok}")
        except HarnessError as e:
            # open_session saves the error screenshot on the way out
            print(f"An error occurred: {e}")
            raise


if __name__ == "__main__":
    verify_nav()
