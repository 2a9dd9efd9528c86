from ipblogs import create_app


app = create_app()
