"""Single-page gallery UI that drives the gallery API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from drone_gallery.services import messages

router = APIRouter(tags=["page"])


@router.get("/", response_class=HTMLResponse)
async def gallery_page() -> HTMLResponse:
    """Serve the drone photo uploader page."""
    return HTMLResponse(_render_page())


def _render_page() -> str:
    return (
        _PAGE_HTML.replace("__EMPTY_GALLERY__", messages.EMPTY_GALLERY)
        .replace("__DELETE_CONFIRM__", messages.DELETE_CONFIRM)
        .replace("__SELECT_FILE_FIRST__", messages.SELECT_FILE_FIRST)
        .replace("__UPLOADING__", messages.UPLOADING)
    )


_PAGE_HTML = """<!doctype html>
<html lang="ko">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>드론 사진 업로더</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .card { border: 1px solid #ddd; border-radius: 8px; padding: 1rem;
              margin-bottom: 1rem; }
      .photo-grid { display: grid; gap: 1rem;
                    grid-template-columns: repeat(auto-fill, minmax(160px, 1fr)); }
      .photo-item { position: relative; cursor: pointer; }
      .photo-item img { width: 100%; height: 120px; object-fit: cover; }
      .photo-item p { overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
      .delete-button { position: absolute; top: 4px; right: 4px; }
      .modal-backdrop { position: fixed; inset: 0; background: rgba(0, 0, 0, 0.8);
                        display: flex; align-items: center; justify-content: center; }
      .modal-content { max-width: 90%; max-height: 90%; }
      .modal-close-button { position: absolute; top: 1rem; right: 1rem;
                            font-size: 2rem; }
      .preview { max-width: 240px; display: block; margin-top: 0.5rem; }
      select, button { margin: 0.25rem; }
    </style>
  </head>
  <body>
    <header><h1>📸 드론 사진 업로더</h1></header>

    <section class="card">
      <h2>새 사진 업로드</h2>
      <input id="file" type="file" accept="image/*" />
      <span id="fields">
        <select id="location"><option value="">위치 선택</option></select>
        <select id="process"><option value="">공정 선택</option></select>
      </span>
      <button id="upload" disabled>업로드</button>
      <img id="preview" class="preview" hidden />
      <p id="status" class="status-message"></p>
    </section>

    <section class="card">
      <h2>업로드된 사진 목록</h2>
      <div id="gallery"></div>
    </section>

    <div id="viewer"></div>

    <script>
      const fileInput = document.getElementById('file');
      const locationSelect = document.getElementById('location');
      const processSelect = document.getElementById('process');
      let optionsRendered = false;

      async function call(method, path, body) {
        const init = { method };
        if (body instanceof FormData) {
          init.body = body;
        } else if (body !== undefined) {
          init.headers = { 'Content-Type': 'application/json' };
          init.body = JSON.stringify(body);
        }
        let res;
        try {
          res = await fetch(path, init);
        } catch (err) {
          console.error(err);
          return null;
        }
        if (!res.ok) {
          if (res.status === 409) {
            const error = await res.json().catch(() => null);
            if (error) alert(error.detail);
          }
          return null;
        }
        const data = await res.json();
        render(data);
        return data;
      }

      function renderOptions(state) {
        if (optionsRendered) return;
        for (const loc of state.locations) {
          locationSelect.add(new Option(String(loc), String(loc)));
        }
        for (const proc of state.processes) {
          processSelect.add(new Option(proc.label, proc.id));
        }
        optionsRendered = true;
      }

      function render(state) {
        renderOptions(state);
        const upload = state.upload;
        document.getElementById('fields').hidden = !upload.requireClassification;
        locationSelect.value = upload.locationId ?? '';
        processSelect.value = upload.processId ?? '';
        document.getElementById('upload').disabled = !upload.canUpload;
        if (!upload.filename) fileInput.value = '';
        const preview = document.getElementById('preview');
        preview.hidden = !upload.previewUrl;
        if (upload.previewUrl) preview.src = upload.previewUrl;
        document.getElementById('status').textContent = state.statusMessage;

        const gallery = document.getElementById('gallery');
        gallery.replaceChildren();
        if (state.photos.length === 0) {
          gallery.textContent = '__EMPTY_GALLERY__';
        } else {
          const grid = document.createElement('div');
          grid.className = 'photo-grid';
          for (const photo of state.photos) {
            const item = document.createElement('div');
            item.className = 'photo-item';
            item.onclick = () => call('POST', `/viewer/${photo.id}`);
            const img = document.createElement('img');
            img.src = photo.imageUrl;
            img.alt = photo.originalFilename;
            const name = document.createElement('p');
            name.title = photo.originalFilename;
            name.textContent = photo.originalFilename;
            const del = document.createElement('button');
            del.className = 'delete-button';
            del.textContent = 'x';
            del.onclick = (event) => {
              event.stopPropagation();
              const prompt = '__DELETE_CONFIRM__'.replace('{photo_id}', photo.id);
              if (confirm(prompt)) {
                call('POST', `/photos/${photo.id}/delete`, { confirmed: true });
              }
            };
            item.append(img, name, del);
            grid.append(item);
          }
          gallery.append(grid);
        }

        const viewer = document.getElementById('viewer');
        viewer.replaceChildren();
        if (state.selectedImage) {
          const backdrop = document.createElement('div');
          backdrop.className = 'modal-backdrop';
          backdrop.onclick = () => call('POST', '/viewer/backdrop');
          const img = document.createElement('img');
          img.className = 'modal-content';
          img.src = state.selectedImage.imageUrl;
          img.alt = state.selectedImage.originalFilename;
          img.onclick = (event) => {
            event.stopPropagation();
            call('POST', '/viewer/image');
          };
          const close = document.createElement('button');
          close.className = 'modal-close-button';
          close.innerHTML = '&times;';
          close.onclick = (event) => {
            event.stopPropagation();
            call('POST', '/viewer/close');
          };
          backdrop.append(img, close);
          viewer.append(backdrop);
        }
      }

      fileInput.onchange = () => {
        const form = new FormData();
        if (fileInput.files.length > 0) form.append('file', fileInput.files[0]);
        call('POST', '/upload/file', form);
      };
      locationSelect.onchange = () => call('POST', '/upload/fields', {
        locationId: locationSelect.value === '' ? null : Number(locationSelect.value)
      });
      processSelect.onchange = () => call('POST', '/upload/fields', {
        processId: processSelect.value === '' ? null : processSelect.value
      });
      document.getElementById('upload').onclick = () => {
        if (!fileInput.value) {
          alert('__SELECT_FILE_FIRST__');
          return;
        }
        document.getElementById('status').textContent = '__UPLOADING__';
        call('POST', '/upload');
      };

      call('GET', '/state');
    </script>
  </body>
</html>
"""
