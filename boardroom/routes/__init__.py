from boardroom.routes.admin import register_admin_routes
from boardroom.routes.auth import register_auth_routes
from boardroom.routes.board import register_board_routes
from boardroom.routes.cron import register_cron_routes


def register_routes(app):
    register_auth_routes(app)
    register_board_routes(app)
    register_admin_routes(app)
    register_cron_routes(app)
