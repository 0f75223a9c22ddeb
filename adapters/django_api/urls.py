"""
TentDesk Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("auth/request-code", views.request_code_view),
    path("auth/verify", views.verify_code_view),
    path("auth/logout", views.logout_view),
    path("auth/session", views.session_view),
    path("tents", views.tents_list_view),
    path("tents/layout", views.tents_layout_view),
    path("tents/<str:code>", views.tent_detail_view),
    path("tents/<str:code>/release", views.tent_release_view),
    path("bookings", views.bookings_view),
    path("receipts", views.receipts_list_view),
    path("receipts/<str:receipt_id>/download", views.receipt_download_view),
    path("messages", views.messages_view),
]
