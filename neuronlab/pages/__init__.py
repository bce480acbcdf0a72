"""Dashboard pages, registered with dash.register_page on import"""
