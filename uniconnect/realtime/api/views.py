from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from uniconnect.realtime.socketio import connection_count
from uniconnect.realtime.socketio import list_connections

from .serializers import OnlineUsersSerializer


class OnlineUsersView(APIView):
    """Users with a live socket connection on this process.

    Optional ``?university=`` narrows the list to one scope.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Realtime"], responses=OnlineUsersSerializer)
    def get(self, request):
        records = list_connections()
        university = request.query_params.get("university")
        if university:
            records = [r for r in records if r.scope_tag == university]
            count = len(records)
        else:
            count = connection_count()
        records.sort(key=lambda r: r.connected_at)
        serializer = OnlineUsersSerializer({"count": count, "results": records})
        return Response(serializer.data)
