from rest_framework.routers import SimpleRouter
from .views import InternshipViewSet

# mounted at the app root, so no API root view
router = SimpleRouter(trailing_slash=False)
router.register(r"", InternshipViewSet, basename="internship")

urlpatterns = router.urls
