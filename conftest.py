pytest_plugins = ["shop_smoke.plugins.fixtures"]
