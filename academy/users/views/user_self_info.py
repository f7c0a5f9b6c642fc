"""
Academy User Fetch Own Courses

This view lets a buyer check their own account and the courses they own.

Views:
- CurrentUserCoursesView: GET the authenticated user with purchased courses

Author: Course Payments Team
Version: 1.0.0
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from academy.users.serializers import ProfileCoursesSerializer


class CurrentUserCoursesView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = ProfileCoursesSerializer(request.user)
        return Response({"success": True, "data": serializer.data}, status=status.HTTP_200_OK)
