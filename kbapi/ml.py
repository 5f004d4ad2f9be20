"""Machine learning saved-object synchronisation."""
from typing import Dict, Optional

from pydantic import Field

from .base import Namespace
from .models import KibanaModel, Params
from .response import APIResponse
from .transport import RequestOption


class SyncResult(KibanaModel):
    success: Optional[bool] = None


class SyncedSavedObjects(KibanaModel):
    anomaly_detector: Optional[Dict[str, SyncResult]] = Field(default=None, alias="anomaly-detector")
    data_frame_analytics: Optional[Dict[str, SyncResult]] = Field(default=None, alias="data-frame-analytics")
    trained_model: Optional[Dict[str, SyncResult]] = Field(default=None, alias="trained-model")


class MLSyncSavedObjects(KibanaModel):
    datafeeds_added: Optional[Dict[str, SyncResult]] = Field(default=None, alias="datafeedsAdded")
    datafeeds_removed: Optional[Dict[str, SyncResult]] = Field(default=None, alias="datafeedsRemoved")
    saved_objects_created: Optional[SyncedSavedObjects] = Field(default=None, alias="savedObjectsCreated")
    saved_objects_deleted: Optional[SyncedSavedObjects] = Field(default=None, alias="savedObjectsDeleted")


class MLSyncSavedObjectsParams(Params):
    simulate: Optional[bool] = None


class MLSyncSavedObjectsRequest(KibanaModel):
    params: MLSyncSavedObjectsParams = Field(default_factory=MLSyncSavedObjectsParams)


class ML(Namespace):

    async def sync_saved_objects(
        self, req: Optional[MLSyncSavedObjectsRequest] = None, *options: RequestOption
    ) -> APIResponse[MLSyncSavedObjects]:
        """Synchronise ML saved objects with the jobs and models in Elasticsearch."""
        req = req or MLSyncSavedObjectsRequest()
        return await self._api.perform(
            "ml.sync_saved_objects", "GET", "/api/ml/saved_objects/sync",
            params=req.params, result=MLSyncSavedObjects, options=options,
        )
