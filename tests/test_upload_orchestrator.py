import asyncio

import pytest

from services.document_ingest.DocumentRegistry import DocumentRegistry
from services.document_ingest.UploadOrchestrator import UploadOrchestrator
from shared.models.errors import ServiceError, TransportError, ValidationError
from shared.models.upload import UploadFile, UploadMilestone, UploadStatus

from conftest import FakeBlobClient, make_document, make_pdf, service_error


@pytest.fixture
def registry(helper_config, document_client) -> DocumentRegistry:
    return DocumentRegistry(helper_config=helper_config, document_client=document_client)


@pytest.fixture
def fast_timers(monkeypatch):
    monkeypatch.setenv("UPLOAD_RESET_DELAY", "0.02")
    monkeypatch.setenv("UPLOAD_PROGRESS_INTERVAL", "0.005")


@pytest.fixture
def orchestrator(helper_config, blob_client, document_client, registry, fast_timers) -> UploadOrchestrator:
    return UploadOrchestrator(
        helper_config=helper_config,
        blob_client=blob_client,
        document_client=document_client,
        registry=registry,
    )


class TestSuccessfulUpload:
    @pytest.mark.asyncio
    async def test_registers_and_prepends_document(self, orchestrator, registry, blob_client, document_client):
        registry.add(make_document("existing"))

        document = await orchestrator.do_upload(make_pdf("notes.pdf", 4096), "Lecture notes", "blob-token")

        assert blob_client.uploads == [("notes.pdf", "blob-token")]
        request = document_client.create_requests[0]
        assert request.title == "Lecture notes"
        assert request.file_url == "https://blob.test/stored-1.pdf"
        assert request.file_name == "notes.pdf"
        assert request.file_size == 4096
        assert [doc.id for doc in registry.documents] == [document.id, "existing"]
        assert orchestrator.status == UploadStatus.SUCCEEDED
        assert orchestrator.error is None

    @pytest.mark.asyncio
    async def test_progress_hits_100_then_resets_after_delay(self, orchestrator):
        await orchestrator.do_upload(make_pdf(), "Notes", "blob-token")
        assert orchestrator.progress == 100

        await asyncio.sleep(0.1)
        assert orchestrator.progress == 0

    @pytest.mark.asyncio
    async def test_emits_milestones_in_order_with_non_decreasing_percent(self, orchestrator):
        events: list[tuple[UploadMilestone | None, int]] = []
        orchestrator.tracker.subscribe(lambda milestone, percent: events.append((milestone, percent)))

        await orchestrator.do_upload(make_pdf(), "Notes", "blob-token")

        milestones = [milestone for milestone, _ in events]
        assert milestones == [
            UploadMilestone.VALIDATED,
            UploadMilestone.REMOTE_UPLOAD_COMPLETE,
            UploadMilestone.REGISTRATION_PENDING,
            UploadMilestone.REGISTRATION_COMPLETE,
        ]
        percents = [percent for _, percent in events]
        assert percents == sorted(percents)
        assert percents[-1] == 100


class TestFailedUpload:
    @pytest.mark.asyncio
    async def test_invalid_file_fails_without_network_calls(self, orchestrator, blob_client, document_client):
        file = UploadFile(name="photo.png", content_type="image/png", size=100)

        with pytest.raises(ValidationError) as excinfo:
            await orchestrator.do_upload(file, "Photo", "blob-token")

        assert excinfo.value.message == "Only PDF files are allowed"
        assert blob_client.uploads == []
        assert document_client.create_requests == []
        assert orchestrator.status == UploadStatus.FAILED
        assert orchestrator.error == "Only PDF files are allowed"
        assert orchestrator.progress == 0

    @pytest.mark.asyncio
    async def test_blob_failure_is_recorded_and_reraised(self, helper_config, document_client, registry, fast_timers):
        blob_client = FakeBlobClient(error=ServiceError("Upload failed: Access denied", status_code=403, server_message="Access denied"))
        orchestrator = UploadOrchestrator(helper_config, blob_client, document_client, registry)

        with pytest.raises(ServiceError):
            await orchestrator.do_upload(make_pdf(), "Notes", "bad-token")

        assert document_client.create_requests == []
        assert orchestrator.error == "Upload failed: Access denied"
        assert orchestrator.progress == 0
        assert orchestrator.status == UploadStatus.FAILED

    @pytest.mark.asyncio
    async def test_registration_failure_leaves_orphaned_blob(self, orchestrator, registry, blob_client, document_client):
        registry.add(make_document("existing"))
        document_client.create_error = service_error("Failed to create document: db down")

        with pytest.raises(ServiceError):
            await orchestrator.do_upload(make_pdf(), "Notes", "blob-token")

        assert len(blob_client.uploads) == 1
        assert orchestrator.progress == 0
        assert orchestrator.error == "Failed to create document: db down"
        assert [doc.id for doc in registry.documents] == ["existing"]
        # nothing tries to clean up the stored blob
        assert blob_client.deleted == []
        assert document_client.delete_calls == []

    @pytest.mark.asyncio
    async def test_non_workspace_error_uses_its_text(self, orchestrator, document_client):
        document_client.create_error = RuntimeError("")

        with pytest.raises(RuntimeError):
            await orchestrator.do_upload(make_pdf(), "Notes", "blob-token")

        assert orchestrator.error == "Upload failed"

    @pytest.mark.asyncio
    async def test_error_is_dismissible(self, orchestrator, document_client):
        document_client.create_error = TransportError("Could not reach documents service")
        with pytest.raises(TransportError):
            await orchestrator.do_upload(make_pdf(), "Notes", "blob-token")

        orchestrator.clear_error()

        assert orchestrator.error is None
        assert orchestrator.status == UploadStatus.FAILED


class TestSimulatedProgress:
    @pytest.fixture
    def simulating(self, helper_config, blob_client, document_client, registry, fast_timers, monkeypatch):
        monkeypatch.setenv("UPLOAD_SIMULATE_PROGRESS", "true")
        return UploadOrchestrator(helper_config, blob_client, document_client, registry)

    @pytest.mark.asyncio
    async def test_estimate_climbs_to_ceiling_while_registration_pending(self, simulating, document_client):
        gate = asyncio.Event()
        document_client.create_gates.append(gate)

        upload = asyncio.create_task(simulating.do_upload(make_pdf(), "Notes", "blob-token"))
        await asyncio.sleep(0.1)

        assert simulating.progress == 90
        assert simulating.is_uploading

        gate.set()
        await upload
        assert simulating.progress == 100
        assert not simulating.tracker.is_estimating()

    @pytest.mark.asyncio
    async def test_estimate_is_cancelled_on_registration_failure(self, simulating, document_client, monkeypatch):
        simulating.tracker.interval = 0.05
        gate = asyncio.Event()
        document_client.create_gates.append(gate)
        document_client.create_error = service_error("db down")

        upload = asyncio.create_task(simulating.do_upload(make_pdf(), "Notes", "blob-token"))
        await asyncio.sleep(0.01)
        assert simulating.tracker.is_estimating()

        gate.set()
        with pytest.raises(ServiceError):
            await upload

        assert not simulating.tracker.is_estimating()
        await asyncio.sleep(0.12)
        assert simulating.progress == 0


class TestOverlappingUploads:
    @pytest.mark.asyncio
    async def test_superseded_upload_does_not_touch_progress_but_is_registered(self, orchestrator, registry, document_client):
        slow_gate = asyncio.Event()
        document_client.create_gates.extend([slow_gate, None])

        slow = asyncio.create_task(orchestrator.do_upload(make_pdf("slow.pdf"), "Slow", "blob-token"))
        await asyncio.sleep(0)
        fast_document = await orchestrator.do_upload(make_pdf("fast.pdf"), "Fast", "blob-token")
        await asyncio.sleep(0.1)
        assert orchestrator.progress == 0

        slow_gate.set()
        slow_document = await slow

        assert orchestrator.progress == 0
        assert orchestrator.session.title == "Fast"
        assert {doc.id for doc in registry.documents} == {fast_document.id, slow_document.id}

    @pytest.mark.asyncio
    async def test_superseded_failure_does_not_set_error(self, orchestrator, document_client):
        slow_gate = asyncio.Event()
        document_client.create_gates.extend([slow_gate, None])

        slow = asyncio.create_task(orchestrator.do_upload(make_pdf("slow.pdf"), "Slow", "blob-token"))
        await asyncio.sleep(0)
        await orchestrator.do_upload(make_pdf("fast.pdf"), "Fast", "blob-token")

        document_client.create_error = service_error("late failure")
        slow_gate.set()
        with pytest.raises(ServiceError):
            await slow

        assert orchestrator.error is None
        assert orchestrator.status == UploadStatus.SUCCEEDED
