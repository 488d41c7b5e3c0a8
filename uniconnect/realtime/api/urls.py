from django.urls import path

from .views import OnlineUsersView

app_name = "realtime"
urlpatterns = [
    path("online/", OnlineUsersView.as_view(), name="online"),
]
