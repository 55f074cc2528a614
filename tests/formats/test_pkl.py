import pickle

from jhsiao.resumable.formats import pkl

def test_reader():
    item1 = pickle.dumps(b'hello world')
    item2 = pickle.dumps({'nested': [1, (2, 3)], 'blob': bytes(range(256)) * 20})
    pr = pkl.Reader()
    objs = []
    pr.extend(item1[:1])
    assert pr.readinto1(objs) is None

    pr.extend(item1[1:])
    assert pr.readinto1(objs) == 1
    assert objs == [b'hello world']

    pr.extend(item1)
    objs, ret = pr.read()
    assert objs == [b'hello world']
    assert ret == 1

    blocksize = 1024
    objs = []
    for stop in range(blocksize, len(item2) + blocksize, blocksize):
        pr.extend(item2[stop-blocksize:stop])
        if stop < len(item2):
            assert pr.readinto1(objs) is None
        else:
            assert pr.readinto1(objs) == 1
    assert objs == [pickle.loads(item2)]

    pr.end()
    assert pr.readinto1(objs) == -1

def test_protocols():
    objs = [None, 3.14, u'text', list(range(100))]
    data = b''.join(pickle.dumps(o, protocol=p) for p, o in enumerate(objs))
    pr = pkl.Reader()
    out = []
    for i in range(0, len(data), 7):
        pr.extend(data[i:i+7])
        pr.readinto(out)
    pr.end()
    assert pr.readinto(out) == -1
    assert out == objs
