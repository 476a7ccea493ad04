from clinometer.app import APP_NAME, APP_VERSION


def test_app_metadata_is_set() -> None:
    assert APP_NAME == "Clinometer"
    assert APP_VERSION.count(".") == 2
