from rest_framework import serializers


class ConnectionRecordSerializer(serializers.Serializer):
    """Read-only view of a live connection (see ``ConnectionRecord``)."""

    user_id = serializers.IntegerField()
    display_name = serializers.CharField()
    initials = serializers.CharField()
    university = serializers.CharField(source="scope_tag")
    connected_at = serializers.DateTimeField()
    status = serializers.CharField(allow_null=True)


class OnlineUsersSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    results = ConnectionRecordSerializer(many=True)
